"""RSA key generation with coprimality checks and a bounded restart loop."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from rsa_core.arithmetic import gcd, mod_inv
from rsa_core.config import RsaConfig
from rsa_core.errors import KeyGenerationExhausted
from rsa_core.keys import KeyPair, PrivateKey, PublicKey
from rsa_core.primes import random_prime

logger = logging.getLogger(__name__)

MIN_KEY_BITS = 16

__all__ = ["MIN_KEY_BITS", "generate_keypair"]


def _attempt(bit_length: int, config: RsaConfig) -> Tuple[Optional[KeyPair], str]:
    """Run one isolated generation attempt.

    Returns ``(keypair, "")`` on success or ``(None, reason)`` when the
    candidate primes have to be thrown away.
    """

    p = random_prime((bit_length + 1) // 2, rounds=config.primality_rounds, rng=config.rng)
    q = random_prime(bit_length // 2, rounds=config.primality_rounds, rng=config.rng)
    if p == q:
        return None, "p == q"

    n = p * q
    if n.bit_length() != bit_length:
        return None, f"n has {n.bit_length()} bits instead of {bit_length}"

    e = config.public_exponent
    if gcd(n, e) != 1:
        return None, "e and n are not coprime"

    phi = (p - 1) * (q - 1)
    if gcd(phi, e) != 1:
        return None, "e and phi are not coprime"

    d = mod_inv(e, phi)
    return KeyPair(PublicKey(n=n, e=e), PrivateKey(n=n, d=d)), ""


def generate_keypair(bit_length: int = 2048, *, config: Optional[RsaConfig] = None) -> KeyPair:
    """Generate an RSA key pair whose modulus has exactly ``bit_length`` bits.

    Each attempt draws fresh primes; nothing from a rejected attempt leaks
    into the result.  Raises :class:`KeyGenerationExhausted` once
    ``config.max_attempts`` attempts have been rejected.
    """

    if bit_length < MIN_KEY_BITS:
        raise ValueError(f"Key size must be at least {MIN_KEY_BITS} bits")

    cfg = config if config is not None else RsaConfig()
    for attempt in range(1, cfg.max_attempts + 1):
        keypair, reason = _attempt(bit_length, cfg)
        if keypair is not None:
            logger.debug("Generated %d-bit key pair on attempt %d", bit_length, attempt)
            return keypair
        logger.debug("Restarting key generation (attempt %d): %s", attempt, reason)

    logger.warning("Key generation exhausted after %d attempts", cfg.max_attempts)
    raise KeyGenerationExhausted(f"a {bit_length}-bit key pair", cfg.max_attempts)
