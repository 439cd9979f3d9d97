"""Preflight checks (repository layout and required tools).

The updater must run from a flake checkout that contains both ``flake.nix``
and the package manifest, and the external tools used by the selected hash
source and builder must be on ``PATH``.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .errors import PreflightError
from .logging_utils import log_event


@dataclass
class CheckResult:
    """A single preflight result."""

    name: str
    success: bool
    detail: str = ""


def run_preflight(
    root: Path, flake: Path, manifest: Path, tools: Iterable[str]
) -> List[CheckResult]:
    checks: List[CheckResult] = []
    layout_ok = flake.is_file() and manifest.is_file()
    checks.append(
        CheckResult(
            "Repository root",
            layout_ok,
            ""
            if layout_ok
            else f"{flake.name} or {manifest.name} not found in {root}. "
            "Run from repository root.",
        )
    )
    for tool in dict.fromkeys(tools):
        found = shutil.which(tool)
        checks.append(
            CheckResult(f"Tool {tool}", bool(found), found or f"{tool} is required")
        )
    for check in checks:
        log_event("preflight_check", check=check.name, success=check.success)
    return checks


def ensure_preflight(
    root: Path, flake: Path, manifest: Path, tools: Iterable[str]
) -> None:
    """Raise :class:`PreflightError` with the first failing check's detail."""
    for check in run_preflight(root, flake, manifest, tools):
        if not check.success:
            raise PreflightError(check.detail)


__all__ = ["CheckResult", "run_preflight", "ensure_preflight"]
