from __future__ import annotations

from .blinding_dashboard import make_blinding_dashboard
from .keygen_dashboard import make_keygen_dashboard

__all__ = ["make_keygen_dashboard", "make_blinding_dashboard"]
