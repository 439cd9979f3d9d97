"""Console UI helpers (color and tagged progress lines).

Progress output goes to stderr so that stdout stays reserved for the
machine-readable check-mode report:
 - ANSI color codes gated by a conservative capability check
 - ``info``/``warn``/``err`` printers with ``[INFO]``/``[WARN]``/``[ERROR]`` tags
 - ``emit_pairs`` for ``KEY=value`` lines on stdout

Respects ``NO_COLOR`` and only emits ANSI when stderr is a TTY.
"""

from __future__ import annotations
import os
import sys
from typing import Iterable, Tuple

RESET = "\033[0m"
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"


def supports_color() -> bool:
    """Return True when ANSI colors are likely supported on stderr.

    Honors ``NO_COLOR`` and requires ``sys.stderr`` to be a TTY. Any errors
    during detection result in ``False``.
    """
    try:
        if os.environ.get("NO_COLOR"):
            return False
        return bool(getattr(sys.stderr, "isatty", lambda: False)())
    except Exception:
        return False


def c(s: str, color: str) -> str:
    """Wrap ``s`` in ``color`` when supported, otherwise return it unchanged."""
    return f"{color}{s}{RESET}" if supports_color() else s


def info(msg: str) -> None:
    """Print an ``[INFO]`` line to stderr."""
    print(c("[INFO]", GREEN) + " " + msg, file=sys.stderr)


def warn(msg: str) -> None:
    """Print a ``[WARN]`` line to stderr."""
    print(c("[WARN]", YELLOW) + " " + msg, file=sys.stderr)


def err(msg: str) -> None:
    """Print an ``[ERROR]`` line to stderr."""
    print(c("[ERROR]", RED) + " " + msg, file=sys.stderr)


def emit_pairs(pairs: Iterable[Tuple[str, str]]) -> None:
    """Write ``KEY=value`` lines to stdout for automation to consume."""
    for key, value in pairs:
        print(f"{key}={value}")


__all__ = [
    "supports_color",
    "c",
    "info",
    "warn",
    "err",
    "emit_pairs",
    "RESET",
    "RED",
    "GREEN",
    "YELLOW",
]
