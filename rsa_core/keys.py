from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PublicKey:
    n: int
    e: int

    @property
    def bit_length(self) -> int:
        return self.n.bit_length()


@dataclass(frozen=True)
class PrivateKey:
    n: int
    d: int = field(repr=False)

    @property
    def bit_length(self) -> int:
        return self.n.bit_length()


@dataclass(frozen=True)
class KeyPair:
    """A public/private pair sharing one modulus."""

    public: PublicKey
    private: PrivateKey

    def __post_init__(self) -> None:
        if self.public.n != self.private.n:
            raise ValueError("Public and private key moduli differ")

    @property
    def n(self) -> int:
        return self.public.n


__all__ = ["PublicKey", "PrivateKey", "KeyPair"]
