"""RSA blind signatures (Chaum).

The requester masks a message ``m`` as ``m * r**e mod n`` with a random
factor ``r`` coprime to ``n``; the signer signs the masked value without
learning ``m``; the requester divides ``r`` back out and is left with an
ordinary RSA signature on ``m``.  No session state lives here: the caller
keeps ``r`` between :func:`blind` and :func:`unblind`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from rsa_core.arithmetic import gcd, mod_inv, mod_pow
from rsa_core.config import DEFAULT_MAX_ATTEMPTS, RsaConfig
from rsa_core.encoding import message_to_int
from rsa_core.errors import KeyGenerationExhausted
from rsa_core.keygen import generate_keypair
from rsa_core.keys import PublicKey
from rsa_core.random_source import RandomSource, default_random_source
from rsa_core.transform import ensure_in_range, sign, verify

logger = logging.getLogger(__name__)

__all__ = [
    "BlindedMessage",
    "draw_blinding_factor",
    "blind_int",
    "blind",
    "unblind",
    "blind_signature_roundtrip",
]


@dataclass(frozen=True)
class BlindedMessage:
    blinded_message: int
    r: int = field(repr=False)


def draw_blinding_factor(
    n: int,
    *,
    rng: Optional[RandomSource] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """Draw ``r`` uniformly from ``[2, n)`` with ``gcd(r, n) == 1``.

    The candidate space follows the size of ``n``, so large moduli get
    equally large blinding factors.
    """

    if n < 3:
        raise ValueError("Modulus too small to blind against")

    source = rng if rng is not None else default_random_source()
    for attempt in range(1, max_attempts + 1):
        r = source.randrange(2, n)
        if gcd(r, n) == 1:
            return r
        logger.debug("Blinding factor not coprime with n (attempt %d); redrawing", attempt)

    logger.warning("Blinding factor selection exhausted after %d attempts", max_attempts)
    raise KeyGenerationExhausted("a blinding factor", max_attempts)


def blind_int(message: int, e: int, n: int, *, config: Optional[RsaConfig] = None) -> BlindedMessage:
    ensure_in_range(message, n, "message")
    cfg = config if config is not None else RsaConfig()
    r = draw_blinding_factor(n, rng=cfg.rng, max_attempts=cfg.max_attempts)
    blinded = (message * mod_pow(r, e, n)) % n
    return BlindedMessage(blinded_message=blinded, r=r)


def blind(message: int, public_key: PublicKey, *, config: Optional[RsaConfig] = None) -> BlindedMessage:
    """Mask ``message`` for signing under the signer's ``public_key``."""

    return blind_int(message, public_key.e, public_key.n, config=config)


def unblind(blind_signature: int, r: int, n: int) -> int:
    """Remove the blinding factor: ``blind_signature * r**-1 mod n``.

    Raises :class:`~rsa_core.errors.NotInvertible` if ``r`` shares a factor
    with ``n``, e.g. when it was paired with the wrong modulus.
    """

    ensure_in_range(blind_signature, n, "blind signature")
    ensure_in_range(r, n, "blinding factor")
    return (blind_signature * mod_inv(r, n)) % n


def blind_signature_roundtrip(
    bits: int = 512,
    message: bytes = b"ballot #42: yes",
    *,
    config: Optional[RsaConfig] = None,
) -> Dict[str, Any]:
    """Run the whole protocol between a requester and a signer.

    The signer only ever sees the blinded value.  The result reports whether
    the unblinded signature verifies and whether it equals a direct
    signature on the message.
    """

    keypair = generate_keypair(bits, config=config)
    public = keypair.public
    m = message_to_int(message, public.n)

    # requester
    request = blind(m, public, config=config)
    # signer
    blind_sig = sign(request.blinded_message, keypair.private)
    # requester
    signature = unblind(blind_sig, request.r, public.n)

    return {
        "public_key": public,
        "message": m,
        "blinded_message": request.blinded_message,
        "blind_signature": blind_sig,
        "signature": signature,
        "verifies": verify(signature, public) == m,
        "matches_direct": signature == sign(m, keypair.private),
        "hides_message": request.blinded_message != m,
    }
