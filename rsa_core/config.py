"""Explicit configuration for key generation and blinding."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from rsa_core.primes import DEFAULT_ROUNDS
from rsa_core.random_source import RandomSource, default_random_source, deterministic_source

DEFAULT_PUBLIC_EXPONENT = 65537
DEFAULT_MAX_ATTEMPTS = 128

__all__ = ["DEFAULT_PUBLIC_EXPONENT", "DEFAULT_MAX_ATTEMPTS", "RsaConfig"]


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError as exc:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from exc


@dataclass(frozen=True)
class RsaConfig:
    """Tunables shared by key generation and blinding-factor selection."""

    public_exponent: int = DEFAULT_PUBLIC_EXPONENT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    primality_rounds: int = DEFAULT_ROUNDS
    rng: RandomSource = field(default_factory=default_random_source, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.public_exponent < 3 or self.public_exponent % 2 == 0:
            raise ValueError("Public exponent must be odd and at least 3")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.primality_rounds < 1:
            raise ValueError("primality_rounds must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RsaConfig":
        """Build a config from ``BLINDRSA_*`` environment variables."""

        env = os.environ if environ is None else environ
        return cls(
            public_exponent=_env_int(env, "BLINDRSA_PUBLIC_EXPONENT", DEFAULT_PUBLIC_EXPONENT),
            max_attempts=_env_int(env, "BLINDRSA_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            primality_rounds=_env_int(env, "BLINDRSA_PRIMALITY_ROUNDS", DEFAULT_ROUNDS),
        )

    @classmethod
    def seeded(cls, seed: int, **overrides) -> "RsaConfig":
        """Config with a reproducible random source (tests only)."""

        return cls(rng=deterministic_source(seed), **overrides)
