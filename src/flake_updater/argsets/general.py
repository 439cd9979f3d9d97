"""Argument definitions: general flags (version, logging)."""

from __future__ import annotations

import argparse


def _has_option(p: argparse.ArgumentParser, opt: str) -> bool:
    try:
        return any(opt in (a.option_strings or []) for a in p._actions)
    except Exception:
        return False


def add_general_args(p: argparse.ArgumentParser, version: str) -> None:
    """Attach version and logging arguments to the parser."""
    if _has_option(p, "--version"):
        return
    general = p.add_argument_group("General")
    general.add_argument("-V", "--version", action="version", version=version)
    general.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO/DEBUG logging"
    )
    general.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Explicit log level (overrides --verbose)",
    )
    general.add_argument("--log-file", help="Also write logs to this file")
    general.add_argument(
        "--log-json", action="store_true", help="Also emit JSON log lines on stderr"
    )


__all__ = ["add_general_args"]
