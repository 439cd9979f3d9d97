from __future__ import annotations

from ..logging_utils import log_event
from ..ui import emit_pairs, info, warn
from .types import UpdateOutcome
from .version import is_backdated


def _log_outcome(outcome: UpdateOutcome, forced: bool) -> None:
    """Emit a structured log for the decision."""
    log_event(
        "update_decided",
        version=str(outcome.current.version),
        hash=outcome.current.hash,
        candidate=str(outcome.candidate_version),
        has_update=outcome.has_update,
        forced=forced,
    )


def _report_outcome(outcome: UpdateOutcome, *, forced: bool, today) -> None:
    """Human-readable summary of the decision on stderr."""
    current = outcome.current
    if not outcome.has_update:
        info("Already up to date!")
        return
    if forced and not outcome.hash_changed:
        warn("Hashes match; forcing update without changing the version.")
    if is_backdated(today, current.version):
        warn(
            f"Current version {current.version} is dated after today "
            f"({today.isoformat()}); {outcome.candidate_version} will sort before it."
        )
    info(
        f"Update available: {current.version} ({current.hash}) -> "
        f"{outcome.candidate_version} ({outcome.latest_hash})"
    )


def _emit_check_report(outcome: UpdateOutcome) -> None:
    """Machine-readable ``KEY=value`` lines on stdout."""
    emit_pairs(outcome.as_pairs())


__all__ = ["_log_outcome", "_report_outcome", "_emit_check_report"]
