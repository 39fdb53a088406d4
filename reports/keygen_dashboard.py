"""Measured key-generation cost and prime-search behaviour."""
from __future__ import annotations

import math
import time
from collections import Counter
from pathlib import Path
from statistics import mean
from typing import Dict, List, Sequence

from rsa_core.config import RsaConfig
from rsa_core.keygen import generate_keypair
from rsa_core.primes import DEFAULT_ROUNDS, random_prime
from rsa_core.random_source import RandomSource, deterministic_source
from utils.plotting import dashboard_grid, export, panel

_TITLE = "RSA Key Generation Analysis"


class _CountingSource:
    """Wraps a random source and counts ``getrandbits`` draws per size."""

    def __init__(self, inner: RandomSource):
        self._inner = inner
        self.draws: Counter = Counter()

    def getrandbits(self, k: int) -> int:
        self.draws[k] += 1
        return self._inner.getrandbits(k)

    def randrange(self, start: int, stop: int) -> int:
        return self._inner.randrange(start, stop)


def _expected_candidates(bits: int) -> float:
    # Prime density near 2**bits is 1/ln(2**bits); only odd numbers are tried.
    return bits * math.log(2) / 2


def measure_prime_search(bit_lengths: Sequence[int], samples: int, seed: int = 7) -> Dict[int, List[int]]:
    """Return, per bit length, how many candidates each prime search needed."""

    counts: Dict[int, List[int]] = {}
    for bits in bit_lengths:
        counts[bits] = []
        for i in range(samples):
            source = _CountingSource(deterministic_source(seed * 1000 + bits + i))
            random_prime(bits, rng=source)
            counts[bits].append(source.draws[bits])
    return counts


def measure_keygen_seconds(bit_lengths: Sequence[int], samples: int, seed: int = 7) -> Dict[int, List[float]]:
    timings: Dict[int, List[float]] = {}
    for bits in bit_lengths:
        timings[bits] = []
        for i in range(samples):
            config = RsaConfig.seeded(seed * 1000 + bits + i)
            start = time.perf_counter()
            generate_keypair(bits, config=config)
            timings[bits].append(time.perf_counter() - start)
    return timings


def make_keygen_dashboard(
    save_path: str | Path,
    *,
    bit_lengths: Sequence[int] = (128, 256, 384, 512),
    samples: int = 3,
) -> Path:
    """Render the key-generation dashboard to *save_path* and return the file path."""

    timings = measure_keygen_seconds(bit_lengths, samples)
    prime_bits = [(bits + 1) // 2 for bits in bit_lengths]
    counts = measure_prime_search(prime_bits, samples)

    fig, axes = dashboard_grid(2, 2, _TITLE)

    # Top-left: wall-clock time per key size
    ax_time = panel(axes[0][0], "Key generation time", xlabel="Modulus size (bits)", ylabel="Seconds (mean)")
    positions = list(range(len(bit_lengths)))
    ax_time.bar(positions, [mean(timings[b]) for b in bit_lengths], color="#4c72b0")
    ax_time.set_xticks(positions)
    ax_time.set_xticklabels([str(b) for b in bit_lengths])

    # Top-right: measured vs expected candidates per prime
    ax_cand = panel(
        axes[0][1],
        "Candidates drawn per prime",
        xlabel="Prime size (bits)",
        ylabel="Candidates",
    )
    ax_cand.plot(prime_bits, [mean(counts[b]) for b in prime_bits], marker="o", label="measured (mean)")
    ax_cand.plot(prime_bits, [_expected_candidates(b) for b in prime_bits], linestyle="--", label="ln(2^b) / 2")
    ax_cand.legend()

    # Bottom-left: Miller-Rabin error bound
    ax_mr = panel(
        axes[1][0],
        "Miller-Rabin false-positive bound",
        xlabel="Rounds",
        ylabel="Probability (upper bound)",
        log_y=True,
    )
    rounds = list(range(1, DEFAULT_ROUNDS + 1))
    ax_mr.plot(rounds, [4.0 ** -k for k in rounds], color="#c44e52")
    ax_mr.axhline(2.0 ** -128, color="gray", linestyle="--", linewidth=1, label="2^-128")
    ax_mr.legend()

    # Bottom-right: spread of candidate counts across all searches
    ax_hist = panel(axes[1][1], "Prime search spread", xlabel="Candidates", ylabel="Searches")
    all_counts = [c for b in prime_bits for c in counts[b]]
    ax_hist.hist(all_counts, bins=max(5, len(all_counts) // 2), color="#55a868")

    return export(fig, save_path)


__all__ = ["make_keygen_dashboard", "measure_prime_search", "measure_keygen_seconds"]
