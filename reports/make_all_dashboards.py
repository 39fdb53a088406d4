from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple


_DASHBOARD_SPECS: Sequence[Tuple[str, str, str]] = (
    ("reports.keygen_dashboard", "make_keygen_dashboard", "keygen_analysis.png"),
    ("reports.blinding_dashboard", "make_blinding_dashboard", "blinding_analysis.png"),
)


@dataclass
class DashboardResult:
    """Outcome of a single dashboard export attempt."""

    module: str
    attr: str
    target: Path
    status: str
    reason: str = ""
    output: Optional[Path] = None


def _load_callable(module_name: str, attr: str) -> Callable[[Path], Path]:
    module = import_module(module_name)
    func = getattr(module, attr, None)
    if func is None:
        raise AttributeError(f"callable '{attr}' not found in {module_name}")
    return func


def make_all_dashboards(out_dir: str | Path = "Visualizations") -> List[DashboardResult]:
    """Generate every dashboard into *out_dir* and describe each attempt."""

    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    results: List[DashboardResult] = []

    for module_name, attr, filename in _DASHBOARD_SPECS:
        target = directory / filename
        try:
            output = _load_callable(module_name, attr)(target)
        except Exception as exc:  # pragma: no cover - runtime safeguard
            reason = f"error: {exc}"
            print(f"skipped {module_name}.{attr} ({reason})")
            results.append(
                DashboardResult(module=module_name, attr=attr, target=target, status="skipped", reason=reason)
            )
            continue
        results.append(
            DashboardResult(module=module_name, attr=attr, target=target, status="saved", output=Path(output))
        )
    return results


def main() -> None:
    for result in make_all_dashboards():
        if result.status == "saved" and result.output is not None:
            print(result.output.resolve())


if __name__ == "__main__":
    main()
