"""Byte-string messages as RSA representatives bound to a modulus.

A message ``data`` maps to the big-endian integer it spells out; that
integer has to be a valid representative, i.e. lie in ``[0, n)``.  Going
back, the representative is written out on the fewest bytes that hold it
unless the caller asks for a fixed ``length`` (e.g. to restore leading
zero bytes).
"""
from __future__ import annotations

from typing import Optional

from rsa_core.errors import ValueOutOfRange

__all__ = ["modulus_bytes", "message_to_int", "int_to_message"]


def modulus_bytes(n: int) -> int:
    """Byte length of the modulus ``n``."""

    return (n.bit_length() + 7) // 8


def message_to_int(data: bytes, n: int) -> int:
    m = int.from_bytes(data, "big")
    if m >= n:
        raise ValueOutOfRange(m, n, "message")
    return m


def int_to_message(value: int, n: int, length: Optional[int] = None) -> bytes:
    if not 0 <= value < n:
        raise ValueOutOfRange(value, n, "message")
    size = (value.bit_length() + 7) // 8 if length is None else length
    if size > modulus_bytes(n):
        raise ValueError(f"length {size} exceeds the {modulus_bytes(n)}-byte modulus")
    try:
        return value.to_bytes(size, "big")
    except OverflowError as exc:
        raise ValueError(f"Representative does not fit in {size} byte(s)") from exc
