"""Aggregated update utilities split into small modules.

Each module holds a cohesive part of the update logic (types, version
derivation, the decision itself, hash sources, reporting) and these are
re-exported for easy import.
"""

from __future__ import annotations

from .types import (
    PackageState,
    UpdateOutcome,
    VersionLabel,
    is_content_hash,
    SRI_SHA256_RE,
)
from .version import next_version, is_backdated
from .decide import evaluate
from .sources import (
    HashSource,
    NixPrefetchSource,
    HttpDigestSource,
    determine_hash_source,
    sri_from_digest,
    HASH_SOURCE_NAMES,
)
from .report import _log_outcome, _report_outcome, _emit_check_report

__all__ = [
    "PackageState",
    "UpdateOutcome",
    "VersionLabel",
    "is_content_hash",
    "SRI_SHA256_RE",
    "next_version",
    "is_backdated",
    "evaluate",
    "HashSource",
    "NixPrefetchSource",
    "HttpDigestSource",
    "determine_hash_source",
    "sri_from_digest",
    "HASH_SOURCE_NAMES",
    "_log_outcome",
    "_report_outcome",
    "_emit_check_report",
]
