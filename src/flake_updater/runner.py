"""Update run sequencing (check and apply modes).

``UpdateRunner`` walks one run through its states::

    Idle -> Loaded -> Fetched -> Decided -> UP_TO_DATE
                                         -> REPORTED            (check mode)
                                         -> Applying -> VERIFIED
                                                     -> ROLLED_BACK

Manifest and fetch failures propagate as exceptions; the CLI adapter maps
the final :class:`RunState` (or the exception) onto an exit code.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .builder import NixBuilder, run_best_effort
from .errors import BuildError
from .manifest import ManifestStore
from .ui import err, info, warn
from .updatesets import (
    HashSource,
    UpdateOutcome,
    evaluate,
    _emit_check_report,
    _log_outcome,
    _report_outcome,
)


class RunState(enum.Enum):
    UP_TO_DATE = "up_to_date"
    REPORTED = "reported"
    VERIFIED = "verified"
    ROLLED_BACK = "rolled_back"


@dataclass
class RunResult:
    state: RunState
    outcome: UpdateOutcome


class FlakeLockRefresh:
    """Post-commit step: refresh ``flake.lock`` and show what changed.

    Both commands are best-effort; failures only produce a warning.
    """

    def __init__(self, root: Path, manifest_name: str, nix: str = "nix") -> None:
        self.root = Path(root)
        self.manifest_name = manifest_name
        self.nix = nix

    def __call__(self, outcome: UpdateOutcome) -> None:
        info("Updating flake.lock...")
        rc = run_best_effort([self.nix, "flake", "update"], self.root)
        if rc != 0:
            warn("nix flake update failed; flake.lock left unchanged")
        info("Changes applied:")
        run_best_effort(
            ["git", "diff", "--stat", self.manifest_name, "flake.lock"], self.root
        )


class UpdateRunner:
    """Sequence one update run against a manifest."""

    def __init__(
        self,
        store: ManifestStore,
        source: HashSource,
        builder: NixBuilder,
        url: str,
        *,
        clock: Optional[Callable[[], date]] = None,
        post_commit: Optional[Callable[[UpdateOutcome], None]] = None,
    ) -> None:
        self.store = store
        self.source = source
        self.builder = builder
        self.url = url
        self.clock = clock
        self.post_commit = post_commit

    def decide(self, force: bool = False) -> UpdateOutcome:
        """Load, fetch and compare; no side effects beyond logging."""
        current = self.store.read()
        info(f"Current version: {current.version}")
        info(f"Current hash: {current.hash}")

        info("Fetching latest artifact from upstream...")
        latest = self.source.fetch(self.url)
        info(f"Latest hash: {latest}")

        today = self.clock() if self.clock is not None else date.today()
        outcome = evaluate(current, latest, today, force)
        _log_outcome(outcome, force)
        _report_outcome(outcome, forced=force, today=today)
        return outcome

    def check(self, force: bool = False) -> RunResult:
        outcome = self.decide(force)
        _emit_check_report(outcome)
        state = RunState.REPORTED if outcome.has_update else RunState.UP_TO_DATE
        return RunResult(state, outcome)

    def apply(self, force: bool = False) -> RunResult:
        outcome = self.decide(force)
        if not outcome.has_update:
            return RunResult(RunState.UP_TO_DATE, outcome)

        info("Applying update...")
        with self.store.write(outcome.candidate) as tx:
            info("Verifying build...")
            try:
                self.builder.verify_or_raise()
            except BuildError as e:
                err(f"Build verification failed: {e}")
                err("Build failed, restoring previous manifest...")
                tx.rollback()
                info(f"Restored {self.store.path.name}")
                return RunResult(RunState.ROLLED_BACK, outcome)
            tx.commit()

        info("Build verification passed")
        info(
            f"Successfully updated from {outcome.current.version} "
            f"to {outcome.candidate_version}"
        )
        if self.post_commit is not None:
            self.post_commit(outcome)
        return RunResult(RunState.VERIFIED, outcome)


__all__ = ["RunState", "RunResult", "UpdateRunner", "FlakeLockRefresh"]
