"""Error types raised by the updater.

Library modules raise these; only :func:`flake_updater.main_flow.main`
turns them into ``[ERROR]`` lines and process exit codes.
"""

from __future__ import annotations


class UpdaterError(Exception):
    """Base class for every expected, user-reportable failure."""


class ManifestFormatError(UpdaterError):
    """The manifest is missing, or a required field is absent or malformed."""


class FetchError(UpdaterError):
    """The upstream hash could not be obtained (network, tool, or empty reply)."""


class BuildError(UpdaterError):
    """Build verification of a staged manifest failed."""


class UsageError(UpdaterError):
    """Bad command-line invocation."""


class PreflightError(UpdaterError):
    """The working directory or toolchain does not satisfy the preconditions."""


class TransactionError(UpdaterError):
    """A manifest transaction was finished twice."""


__all__ = [
    "UpdaterError",
    "ManifestFormatError",
    "FetchError",
    "BuildError",
    "UsageError",
    "PreflightError",
    "TransactionError",
]
