"""Typed containers for update runs.

``VersionLabel`` is the date-based version (``YYYY.MM.DD[.N]``),
``PackageState`` the persisted ``(version, hash)`` pair, and ``UpdateOutcome``
the transient result of comparing it with a freshly fetched hash. Content
hashes are plain strings in SRI form (``sha256-<base64>``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from functools import total_ordering
from typing import List, Optional, Tuple

_VERSION_RE = re.compile(r"^(\d{4})\.(\d{2})\.(\d{2})(?:\.(\d+))?$")
SRI_SHA256_RE = re.compile(r"^sha256-[A-Za-z0-9+/]{43}=$")


def is_content_hash(text: object) -> bool:
    """Return True if ``text`` is a canonical ``sha256-`` SRI hash."""
    return isinstance(text, str) and bool(SRI_SHA256_RE.match(text))


@total_ordering
@dataclass(frozen=True)
class VersionLabel:
    """Immutable ``YYYY.MM.DD[.N]`` label.

    ``suffix`` is ``None`` for the first release of a day and ``>= 2`` for
    later same-day releases; there is no ``.1``. Labels order by date, then
    by suffix with the unsuffixed form first.
    """

    year: int
    month: int
    day: int
    suffix: Optional[int] = None

    def __post_init__(self) -> None:
        date(self.year, self.month, self.day)
        if self.suffix is not None and self.suffix < 2:
            raise ValueError(f"version suffix must be >= 2, got {self.suffix}")

    @classmethod
    def for_date(cls, day: date, suffix: Optional[int] = None) -> "VersionLabel":
        return cls(day.year, day.month, day.day, suffix)

    @classmethod
    def parse(cls, text: str) -> "VersionLabel":
        """Parse the canonical text form; raise ``ValueError`` otherwise."""
        m = _VERSION_RE.match((text or "").strip())
        if not m:
            raise ValueError(f"not a YYYY.MM.DD[.N] version: {text!r}")
        year, month, day, suffix = m.groups()
        return cls(int(year), int(month), int(day), int(suffix) if suffix else None)

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)

    def _sort_key(self) -> Tuple[int, int, int, int]:
        return (self.year, self.month, self.day, self.suffix or 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionLabel):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        base = f"{self.year:04d}.{self.month:02d}.{self.day:02d}"
        return base if self.suffix is None else f"{base}.{self.suffix}"


@dataclass(frozen=True)
class PackageState:
    """The persisted manifest pair."""

    version: VersionLabel
    hash: str


@dataclass(frozen=True)
class UpdateOutcome:
    """Result of comparing the manifest state with the upstream hash."""

    has_update: bool
    current: PackageState
    candidate_version: VersionLabel
    latest_hash: str

    @property
    def candidate(self) -> PackageState:
        return PackageState(self.candidate_version, self.latest_hash)

    @property
    def hash_changed(self) -> bool:
        return self.current.hash != self.latest_hash

    def as_pairs(self) -> List[Tuple[str, str]]:
        """Ordered ``KEY``/value pairs for the check-mode report."""
        return [
            ("UPDATE_AVAILABLE", "true" if self.has_update else "false"),
            ("CURRENT_VERSION", str(self.current.version)),
            ("NEW_VERSION", str(self.candidate_version)),
            ("CURRENT_HASH", self.current.hash),
            ("NEW_HASH", self.latest_hash),
        ]
