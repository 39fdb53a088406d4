"""Textbook RSA transforms: encrypt, decrypt, sign and verify.

Every transform is a single modular exponentiation.  Inputs must already be
representatives in ``[0, n)``; nothing is reduced or truncated silently.
The ``*_int`` functions take raw ``(exponent, modulus)`` values so that a
third party's signature can be checked without a key object.
"""
from __future__ import annotations

from typing import Optional, Tuple

from rsa_core.arithmetic import mod_pow
from rsa_core.config import RsaConfig
from rsa_core.encoding import int_to_message, message_to_int
from rsa_core.errors import ValueOutOfRange
from rsa_core.keygen import generate_keypair
from rsa_core.keys import PrivateKey, PublicKey

__all__ = [
    "ensure_in_range",
    "encrypt_int",
    "decrypt_int",
    "sign_int",
    "verify_int",
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    "signature_matches",
    "rsa_roundtrip",
]


def ensure_in_range(value: int, modulus: int, label: str = "value") -> None:
    """Raise unless ``value`` is an int representative in ``[0, modulus)``."""

    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{label} must be an integer")
    if not 0 <= value < modulus:
        raise ValueOutOfRange(value, modulus, label)


def encrypt_int(m: int, e: int, n: int) -> int:
    ensure_in_range(m, n, "message")
    return mod_pow(m, e, n)


def decrypt_int(c: int, d: int, n: int) -> int:
    ensure_in_range(c, n, "ciphertext")
    return mod_pow(c, d, n)


def sign_int(m: int, d: int, n: int) -> int:
    ensure_in_range(m, n, "message")
    return mod_pow(m, d, n)


def verify_int(s: int, e: int, n: int) -> int:
    """Recover ``s**e mod n``; the caller compares it with the expected message."""

    ensure_in_range(s, n, "signature")
    return mod_pow(s, e, n)


def encrypt(message: int, public_key: PublicKey) -> int:
    return encrypt_int(message, public_key.e, public_key.n)


def decrypt(ciphertext: int, private_key: PrivateKey) -> int:
    return decrypt_int(ciphertext, private_key.d, private_key.n)


def sign(message: int, private_key: PrivateKey) -> int:
    return sign_int(message, private_key.d, private_key.n)


def verify(signature: int, public_key: PublicKey) -> int:
    return verify_int(signature, public_key.e, public_key.n)


def signature_matches(message: int, signature: int, public_key: PublicKey) -> bool:
    """Return ``True`` when ``signature`` verifies to ``message`` under ``public_key``."""

    ensure_in_range(message, public_key.n, "message")
    return verify(signature, public_key) == message


def rsa_roundtrip(bits: int = 512, *, config: Optional[RsaConfig] = None) -> Tuple[int, int, int, bool]:
    """Generate a small RSA key and perform an encrypt/decrypt round-trip.

    Returns the key parameters together with a boolean indicating whether
    both the decrypted plaintext and the verified signature match the
    original message.
    """

    keypair = generate_keypair(bits, config=config)
    n, e, d = keypair.n, keypair.public.e, keypair.private.d
    msg = b"hi rsa"
    m = message_to_int(msg, n)
    c = encrypt(m, keypair.public)
    out = int_to_message(decrypt(c, keypair.private), keypair.n)
    signed_ok = verify(sign(m, keypair.private), keypair.public) == m
    return n, e, d, out == msg and signed_ok
