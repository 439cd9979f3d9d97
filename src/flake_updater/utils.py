"""Utility helpers: version discovery for the installed or source build."""

from __future__ import annotations
import re
import sys
from pathlib import Path

from importlib.metadata import version as pkg_version

DIST_NAME = "flake-hash-updater"


def get_version() -> str:
    """Return the tool version string.

    Lookup order (first match wins):
    1) ``importlib.metadata.version('flake-hash-updater')`` (installed package)
    2) ``project.version`` in ``pyproject.toml`` (source checkout)
    3) ``"0.0.0+unknown"``
    """
    pv = getattr(sys.modules.get("flake_hash_updater"), "pkg_version", pkg_version)
    try:
        return pv(DIST_NAME)
    except Exception:
        pass

    pyproj = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproj.exists():
        try:
            text = pyproj.read_text(encoding="utf-8")
        except OSError:
            return "0.0.0+unknown"
        m = re.search(r"(?ms)^\[project\].*?^version\s*=\s*\"([^\"]+)\"", text)
        if m:
            return m.group(1)

    return "0.0.0+unknown"


__all__ = ["get_version", "pkg_version", "DIST_NAME"]
