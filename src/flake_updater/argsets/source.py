"""Argument definitions: what to track and where it lives.

Defaults come from :mod:`flake_updater.defaults`, overridden by the
``FLAKE_UPDATER_*`` environment variables, overridden in turn by flags.
"""

from __future__ import annotations

import argparse

from ..defaults import (
    DEFAULT_ATTR,
    DEFAULT_HASH_SOURCE,
    DEFAULT_MANIFEST,
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    ENV_ATTR,
    ENV_ROOT,
    ENV_URL,
    env_default,
)
from ..updatesets import HASH_SOURCE_NAMES


def add_source_args(p: argparse.ArgumentParser) -> None:
    """Attach repository, upstream and build options."""
    repo = p.add_argument_group("Repository")
    repo.add_argument(
        "--root",
        default=env_default(ENV_ROOT, "."),
        help=f"Repository root containing flake.nix (env {ENV_ROOT})",
    )
    repo.add_argument(
        "--manifest",
        default=DEFAULT_MANIFEST,
        help="Package manifest file, relative to --root",
    )
    repo.add_argument(
        "--attr",
        default=env_default(ENV_ATTR, DEFAULT_ATTR),
        help=f"Flake package attribute built for verification (env {ENV_ATTR})",
    )
    repo.add_argument(
        "--no-flake-update",
        action="store_true",
        help="Skip 'nix flake update' after a successful update",
    )

    upstream = p.add_argument_group("Upstream")
    upstream.add_argument(
        "--url",
        default=env_default(ENV_URL, DEFAULT_URL),
        help=f"Upstream artifact URL (env {ENV_URL})",
    )
    upstream.add_argument(
        "--hash-source",
        choices=list(HASH_SOURCE_NAMES),
        default=DEFAULT_HASH_SOURCE,
        help="How to compute the upstream hash",
    )
    upstream.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Download timeout in seconds (http hash source only)",
    )


__all__ = ["add_source_args"]
