import logging
from pathlib import Path

import pytest

from manifest_fixtures import FLAKE, HASH_X, package_text


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging so streams don't leak."""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, "_added_by_configure_logging", False):
            root.removeHandler(h)
            h.close()
    root.setLevel(logging.WARNING)


@pytest.fixture
def repo(tmp_path: Path):
    """A flake checkout with ``flake.nix`` and a ``package.nix`` factory."""

    def make(version: str = "2025.01.14", hash_: str = HASH_X) -> Path:
        (tmp_path / "flake.nix").write_text(FLAKE, encoding="utf-8")
        manifest = tmp_path / "package.nix"
        manifest.write_bytes(package_text(version, hash_).encode("utf-8"))
        return manifest

    return make
