"""flake-hash-updater: date-versioned Nix package updates driven by content hashes."""

from .main_flow import main

__all__ = ["main"]
