"""Argument parsing.

Option groups are attached by the ``argsets`` helpers. Parse errors raise
:class:`~flake_updater.errors.UsageError` instead of exiting with argparse's
status 2, so the CLI can print usage and exit 1. ``--help`` and
``--version`` still exit 0 through argparse.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .errors import UsageError
from .utils import get_version

_EPILOG = """\
Examples:
  %(prog)s              # Check and apply updates
  %(prog)s --check      # CI mode: check only, exit 1 if update needed
  %(prog)s --force      # Force regenerate (e.g., after flake.lock update)
"""


class UpdaterArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        prefix = "unrecognized arguments: "
        if message.startswith(prefix):
            message = "Unknown option: " + message[len(prefix) :]
        raise UsageError(message)


def build_parser() -> UpdaterArgumentParser:
    p = UpdaterArgumentParser(
        prog="flake-hash-updater",
        description=(
            "Nix package updater for upstream artifacts without version "
            "numbers. Detects new versions via hash comparison."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
        allow_abbrev=False,
    )

    from .argsets import add_general_args, add_mode_args, add_source_args

    add_mode_args(p)
    add_source_args(p)
    add_general_args(p, get_version())
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv`` (defaults to ``sys.argv[1:]``)."""
    if argv is None:
        argv = sys.argv[1:]
    return build_parser().parse_args(argv)


__all__ = ["UpdaterArgumentParser", "build_parser", "parse_args"]
