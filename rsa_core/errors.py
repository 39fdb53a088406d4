"""Exception types raised by the RSA core and the blinding protocol."""
from __future__ import annotations


class BlindRsaError(Exception):
    """Base class for every recoverable error raised by this package."""


class NotInvertible(BlindRsaError, ValueError):
    """Raised when ``value`` has no multiplicative inverse modulo ``modulus``."""

    def __init__(self, value: int, modulus: int):
        self.value = value
        self.modulus = modulus
        super().__init__(f"No modular inverse: gcd({value}, {modulus}) != 1")


class ValueOutOfRange(BlindRsaError, ValueError):
    """Raised when a message/ciphertext/signature is not in ``[0, modulus)``."""

    def __init__(self, value: int, modulus: int, label: str = "value"):
        self.value = value
        self.modulus = modulus
        self.label = label
        super().__init__(f"{label.capitalize()} representative out of range [0, n)")


class KeyGenerationExhausted(BlindRsaError, RuntimeError):
    """Raised when a bounded retry loop gives up."""

    def __init__(self, what: str, attempts: int):
        self.what = what
        self.attempts = attempts
        super().__init__(f"Gave up generating {what} after {attempts} attempt(s)")


__all__ = [
    "BlindRsaError",
    "NotInvertible",
    "ValueOutOfRange",
    "KeyGenerationExhausted",
]
