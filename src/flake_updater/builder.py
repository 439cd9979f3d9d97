"""Build verification through ``nix build``.

The builder runs ``nix build .#<attr> --no-link`` in the repository root
after the candidate manifest has been staged. Build output is passed through
to the terminal; only the exit status decides success.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import BuildError
from .logging_utils import log_event


@dataclass
class BuildResult:
    success: bool
    detail: str = ""


class NixBuilder:
    """Verify that the flake package still builds."""

    required_tools = ("nix",)

    def __init__(self, root: Path, attr: str, nix: str = "nix") -> None:
        self.root = Path(root)
        self.attr = attr
        self.nix = nix

    def command(self) -> List[str]:
        return [self.nix, "build", f".#{self.attr}", "--no-link"]

    def verify(self) -> BuildResult:
        """Run the build and report the outcome; never raises for build failures."""
        cmd = self.command()
        started = time.monotonic()
        try:
            rc = subprocess.run(cmd, cwd=str(self.root)).returncode
        except OSError as e:
            result = BuildResult(False, f"could not run {cmd[0]}: {e}")
        else:
            if rc == 0:
                result = BuildResult(True, "build succeeded")
            else:
                result = BuildResult(False, f"{' '.join(cmd)} exited with {rc}")
        log_event(
            "build_verified",
            path=str(self.root),
            duration_ms=int((time.monotonic() - started) * 1000),
            error_type=None if result.success else "BuildError",
        )
        return result

    def verify_or_raise(self) -> None:
        result = self.verify()
        if not result.success:
            raise BuildError(result.detail or "build verification failed")


def run_best_effort(cmd: List[str], cwd: Path) -> Optional[int]:
    """Run a follow-up command; return its exit code or ``None`` if it cannot start."""
    try:
        return subprocess.run(cmd, cwd=str(cwd)).returncode
    except OSError:
        return None


__all__ = ["BuildResult", "NixBuilder", "run_best_effort"]
