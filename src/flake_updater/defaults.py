"""Defaults for the tracked package (upstream URL, file names, flake attr)."""

from __future__ import annotations

import os
from typing import Optional

DEFAULT_URL = (
    "https://launcher.hytale.com/builds/release/linux/amd64/"
    "hytale-launcher-latest.flatpak"
)
DEFAULT_MANIFEST = "package.nix"
DEFAULT_FLAKE = "flake.nix"
DEFAULT_ATTR = "hytale-launcher"
DEFAULT_HASH_SOURCE = "nix"
DEFAULT_TIMEOUT = 60.0

ENV_URL = "FLAKE_UPDATER_URL"
ENV_ROOT = "FLAKE_UPDATER_ROOT"
ENV_ATTR = "FLAKE_UPDATER_ATTR"


def env_default(name: str, fallback: Optional[str] = None) -> Optional[str]:
    """Return a non-empty environment value for ``name`` or ``fallback``."""
    value = (os.environ.get(name) or "").strip()
    return value or fallback


__all__ = [
    "DEFAULT_URL",
    "DEFAULT_MANIFEST",
    "DEFAULT_FLAKE",
    "DEFAULT_ATTR",
    "DEFAULT_HASH_SOURCE",
    "DEFAULT_TIMEOUT",
    "ENV_URL",
    "ENV_ROOT",
    "ENV_ATTR",
    "env_default",
]
