"""Argument definitions: run mode (check or apply, forced or not)."""

from __future__ import annotations

import argparse


def add_mode_args(p: argparse.ArgumentParser) -> None:
    """Attach ``--check`` and ``--force``.

    - ``--check``: only report; exit 1 when an update is available
    - ``--force``: treat the run as an update even if the hashes match
    """
    mode = p.add_argument_group("Mode")
    mode.add_argument(
        "--check",
        action="store_true",
        help="Only check for updates, don't apply (exit 1 if update available)",
    )
    mode.add_argument(
        "--force",
        action="store_true",
        help="Force update even if hashes match",
    )


__all__ = ["add_mode_args"]
