"""Shared figure plumbing for the dashboards in ``reports/``."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

# Width/height of a single dashboard panel, in inches.
PANEL_SIZE = (5.5, 3.5)


def dashboard_grid(rows: int, cols: int, title: str):
    """Figure with a ``rows x cols`` panel grid and a dashboard-wide title."""
    width, height = PANEL_SIZE
    fig, axes = plt.subplots(rows, cols, figsize=(cols * width, rows * height), squeeze=False)
    fig.suptitle(title, fontsize=16)
    return fig, axes


def panel(
    ax: Axes,
    title: str,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    *,
    log_y: bool = False,
) -> Axes:
    ax.set_title(title)
    ax.set_xlabel(xlabel or "")
    ax.set_ylabel(ylabel or "")
    if log_y:
        ax.set_yscale("log")
    ax.grid(True, alpha=0.3)
    return ax


def export(fig: Figure, path, *, title_band: float = 0.04) -> Path:
    """Lay out the panels below the suptitle, write a PNG and release the figure."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout(rect=(0, 0, 1, 1 - title_band))
    fig.savefig(str(target), bbox_inches="tight")
    plt.close(fig)
    return target


__all__ = ["PANEL_SIZE", "dashboard_grid", "panel", "export"]
