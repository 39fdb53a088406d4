"""Probabilistic primality testing and random prime generation."""
from __future__ import annotations

import logging
from functools import reduce
from typing import Optional

from rsa_core.arithmetic import gcd, mod_pow
from rsa_core.random_source import RandomSource, default_random_source

logger = logging.getLogger(__name__)

# 64 Miller-Rabin rounds bound the false-positive rate by 4**-64 == 2**-128.
DEFAULT_ROUNDS = 64

SMALL_PRIMES = tuple(
    n for n in range(2, 1000) if all(n % p for p in range(2, int(n ** 0.5) + 1))
)
_SMALL_PRIME_SET = frozenset(SMALL_PRIMES)
_SMALL_PRIME_PRODUCT = reduce(lambda acc, p: acc * p, SMALL_PRIMES, 1)
# Anything below this with no factor in SMALL_PRIMES is prime.
_TRIAL_LIMIT = 1000 * 1000

__all__ = ["DEFAULT_ROUNDS", "SMALL_PRIMES", "is_probable_prime", "random_prime"]


def _miller_rabin_round(n: int, a: int, d: int, s: int) -> bool:
    x = mod_pow(a, d, n)
    if x in (1, n - 1):
        return True
    for _ in range(s - 1):
        x = (x * x) % n
        if x == n - 1:
            return True
    return False


def is_probable_prime(
    candidate: int,
    rounds: int = DEFAULT_ROUNDS,
    *,
    rng: Optional[RandomSource] = None,
) -> bool:
    """Return ``True`` when ``candidate`` is probably prime using Miller–Rabin.

    Composites sharing a factor with the small-prime table are rejected with
    a single gcd before any exponentiation happens.  Primes are never
    rejected; a composite survives with probability at most ``4**-rounds``.
    """

    if rounds < 1:
        raise ValueError("Miller-Rabin needs at least one round")
    if candidate < 2:
        return False
    if candidate in _SMALL_PRIME_SET:
        return True
    if gcd(candidate, _SMALL_PRIME_PRODUCT) != 1:
        return False
    if candidate < _TRIAL_LIMIT:
        return True

    # Write candidate-1 as (2**s) * d with d odd.
    d = candidate - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    source = rng if rng is not None else default_random_source()
    for _ in range(rounds):
        a = source.randrange(2, candidate - 1)  # 2 <= a <= candidate-2
        if not _miller_rabin_round(candidate, a, d, s):
            return False
    return True


def random_prime(
    bit_length: int,
    *,
    rounds: int = DEFAULT_ROUNDS,
    rng: Optional[RandomSource] = None,
) -> int:
    """Generate a random probable prime with exactly ``bit_length`` bits."""

    if bit_length < 2:
        raise ValueError("Prime size must be at least 2 bits")

    source = rng if rng is not None else default_random_source()
    trials = 0
    while True:
        trials += 1
        cand = source.getrandbits(bit_length)
        # Top bit fixes the size, bottom bit makes it odd.
        cand |= (1 << (bit_length - 1)) | 1
        if is_probable_prime(cand, rounds, rng=source):
            logger.debug("Found %d-bit prime after %d candidate(s)", bit_length, trials)
            return cand
