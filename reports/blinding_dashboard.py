"""How blinding factors and blinded messages are distributed."""
from __future__ import annotations

from pathlib import Path
from statistics import mean
from typing import Dict, List, Sequence

from blindsig.blinding import blind, draw_blinding_factor
from rsa_core.config import RsaConfig
from rsa_core.keygen import generate_keypair
from utils.plotting import dashboard_grid, export, panel

_TITLE = "Blinding Factor Analysis"
# Fixed-size blinding factor shown for comparison.
_FIXED_FACTOR_BITS = 1024


def blinding_factor_sizes(bit_lengths: Sequence[int], draws: int, seed: int = 11) -> Dict[int, List[int]]:
    sizes: Dict[int, List[int]] = {}
    for bits in bit_lengths:
        config = RsaConfig.seeded(seed + bits)
        n = generate_keypair(bits, config=config).n
        sizes[bits] = [draw_blinding_factor(n, rng=config.rng).bit_length() for _ in range(draws)]
    return sizes


def blinded_fractions(bits: int, draws: int, seed: int = 13) -> List[float]:
    """Blind one fixed message repeatedly; return each result as a fraction of n."""

    config = RsaConfig.seeded(seed)
    public = generate_keypair(bits, config=config).public
    message = 42
    return [blind(message, public, config=config).blinded_message / public.n for _ in range(draws)]


def make_blinding_dashboard(
    save_path: str | Path,
    *,
    bit_lengths: Sequence[int] = (128, 256, 384, 512),
    draws: int = 200,
) -> Path:
    sizes = blinding_factor_sizes(bit_lengths, draws)
    fractions = blinded_fractions(bit_lengths[-1], draws)

    fig, axes = dashboard_grid(1, 2, _TITLE)

    ax_size = panel(
        axes[0][0],
        "Blinding factor size tracks the modulus",
        xlabel="Modulus size (bits)",
        ylabel="r size (bits)",
    )
    ax_size.plot(bit_lengths, [mean(sizes[b]) for b in bit_lengths], marker="o", label="r drawn from [2, n)")
    ax_size.plot(bit_lengths, bit_lengths, linestyle=":", color="gray", label="n size")
    ax_size.axhline(_FIXED_FACTOR_BITS, color="#c44e52", linestyle="--", linewidth=1, label="fixed 1024-bit r")
    ax_size.legend()

    ax_frac = panel(
        axes[0][1],
        f"Blinded values of one message ({bit_lengths[-1]}-bit n)",
        xlabel="blinded / n",
        ylabel="Count",
    )
    ax_frac.hist(fractions, bins=20, range=(0.0, 1.0), color="#4c72b0")

    return export(fig, save_path, title_band=0.08)


__all__ = ["make_blinding_dashboard", "blinding_factor_sizes", "blinded_fractions"]
