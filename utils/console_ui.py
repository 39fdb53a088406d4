"""Console presentation helpers for the blindrsa demos."""
from __future__ import annotations

import os
import shutil
import sys
from typing import Optional

import colorama
import pyfiglet
from colorama import Fore, Style

__all__ = [
    "init",
    "banner",
    "step_header",
    "running_panel",
    "section",
    "kv",
    "kv_int",
    "bullet",
    "success",
    "warning",
    "error",
    "elapsed",
    "rule",
    "line",
]

_width = 100
_plain_mode = False
_use_color = False

_PLAIN_SYMBOLS = {"success": "[OK]", "warning": "[!]", "error": "[X]", "bullet": "-"}
_FANCY_SYMBOLS = {"success": "✓", "warning": "!", "error": "✗", "bullet": "•"}
_symbols = dict(_FANCY_SYMBOLS)

# Big integers are shown as a hex head of this many digits.
INT_PREVIEW_DIGITS = 64


def init(plain: bool = False) -> None:
    """Pick width, colour and symbols for the current terminal."""

    global _width, _plain_mode, _use_color, _symbols

    _width = shutil.get_terminal_size(fallback=(100, 24)).columns or 100

    isatty = getattr(sys.stdout, "isatty", None)
    is_tty = bool(isatty()) if callable(isatty) else False

    _plain_mode = plain or bool(os.environ.get("NO_COLOR")) or not is_tty
    _use_color = not _plain_mode
    if _use_color:
        colorama.init(autoreset=True)
    _symbols = dict(_PLAIN_SYMBOLS if _plain_mode else _FANCY_SYMBOLS)


def _paint(color: str, message: str) -> str:
    if not _use_color:
        return message
    return f"{color}{Style.BRIGHT}{message}{Style.RESET_ALL}"


def rule(char: str = "=", width: Optional[int] = None) -> None:
    count = width if width is not None else _width
    print(char * max(1, count))


def banner(title: str) -> None:
    if _plain_mode:
        print(f"=== {title} ===".center(_width))
        return
    print(pyfiglet.figlet_format(title, width=_width))


def step_header(i: int, n: int, title: str) -> None:
    print(_paint(Fore.CYAN, f"[{i}/{n}] Preparing to run: {title}"))


def running_panel(title: str, module: str | None = None) -> None:
    rule("=")
    print(_paint(Fore.MAGENTA, f"RUNNING: {title}"))
    print(f"Module: {module or 'n/a'}")
    rule("=")


def section(title: str) -> None:
    rule("=")
    print(f" {title.upper()}")
    rule("=")


def kv(key: str, value: str) -> None:
    print(f"{key}: {value}")


def kv_int(key: str, value: int) -> None:
    """Print a (possibly huge) integer as a truncated hex preview."""

    digits = f"{value:x}"
    head = digits[:INT_PREVIEW_DIGITS]
    suffix = "…" if len(digits) > INT_PREVIEW_DIGITS else ""
    print(f"{key}: 0x{head}{suffix} ({value.bit_length()} bits)")


def bullet(msg: str) -> None:
    print(f"{_symbols['bullet']} {msg}")


def success(msg: str) -> None:
    print(_paint(Fore.GREEN, f"{_symbols['success']} {msg}"))


def warning(msg: str) -> None:
    print(_paint(Fore.YELLOW, f"{_symbols['warning']} {msg}"))


def error(msg: str) -> None:
    print(_paint(Fore.RED, f"{_symbols['error']} {msg}"))


def elapsed(prefix: str, seconds: float) -> None:
    print(f"{prefix} {seconds:.2f}s")


def line() -> None:
    rule("-")
