"""Random sources used for prime search, witnesses and blinding factors."""
from __future__ import annotations

import random
from typing import Protocol

from Crypto.Random.random import StrongRandom

__all__ = ["RandomSource", "default_random_source", "deterministic_source"]


class RandomSource(Protocol):
    """Anything exposing ``getrandbits`` and ``randrange`` like :mod:`random`."""

    def getrandbits(self, k: int) -> int:
        ...

    def randrange(self, start: int, stop: int) -> int:
        ...


def default_random_source() -> RandomSource:
    """Cryptographically secure source backed by the OS CSPRNG (pycryptodome)."""

    return StrongRandom()


def deterministic_source(seed: int) -> RandomSource:
    """Seeded, reproducible source.

    Not suitable for real keys; tests and dashboards use it so that runs can
    be repeated without touching production entropy.
    """

    return random.Random(seed)
