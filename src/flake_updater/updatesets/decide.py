"""Update decision: compare the recorded state with the upstream hash."""

from __future__ import annotations

from datetime import date

from .types import PackageState, UpdateOutcome
from .version import next_version


def evaluate(
    current: PackageState,
    latest_hash: str,
    today: date,
    force: bool = False,
) -> UpdateOutcome:
    """Decide whether ``latest_hash`` constitutes an update.

    ``force`` marks the outcome as an update even when the hashes match, but
    only a real hash change advances the version: forcing with an unchanged
    hash keeps the current label and rewrites the same hash.
    """

    hashes_differ = current.hash != latest_hash
    return UpdateOutcome(
        has_update=force or hashes_differ,
        current=current,
        candidate_version=next_version(today, current.version, hashes_differ),
        latest_hash=latest_hash,
    )
