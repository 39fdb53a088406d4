"""Modular arithmetic over Python integers."""
from __future__ import annotations

from typing import Tuple

from rsa_core.errors import NotInvertible

__all__ = ["gcd", "egcd", "mod_pow", "mod_inv"]


def gcd(a: int, b: int) -> int:
    """Greatest common divisor, with ``gcd(a, 0) == a``."""

    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """Extended Euclidean algorithm without recursion.

    Returns ``(g, x, y)`` with ``a*x + b*y == g``.  The loop form keeps the
    routine usable for operands of several thousand bits, where a recursive
    version would run into Python's recursion limit.
    """

    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t

    return old_r, old_s, old_t


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Compute ``base**exponent % modulus`` by square-and-multiply."""

    if modulus < 1:
        raise ValueError("Modulus must be positive")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus == 1:
        return 0

    result = 1
    base %= modulus
    while exponent:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        if exponent:
            base = (base * base) % modulus
    return result


def mod_inv(a: int, modulus: int) -> int:
    """Return ``x`` in ``[0, modulus)`` such that ``a*x % modulus == 1``."""

    if modulus < 1:
        raise ValueError("Modulus must be positive")
    g, x, _ = egcd(a % modulus, modulus)
    if g != 1:
        raise NotInvertible(a, modulus)
    return x % modulus
