from __future__ import annotations
import sys
from pathlib import Path
from typing import List, Optional

from .args import build_parser, parse_args
from .builder import NixBuilder
from .defaults import DEFAULT_FLAKE
from .doctor import ensure_preflight
from .errors import UpdaterError, UsageError
from .logging_utils import configure_logging, log_event
from .manifest import ManifestStore
from .runner import FlakeLockRefresh, RunState, UpdateRunner
from .ui import err, warn
from .updatesets import determine_hash_source

EXIT_UPDATE_AVAILABLE = 1
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# Exit codes exist only at this layer; the runner reports a RunState.
EXIT_CODES = {
    RunState.UP_TO_DATE: 0,
    RunState.REPORTED: EXIT_UPDATE_AVAILABLE,
    RunState.VERIFIED: 0,
    RunState.ROLLED_BACK: EXIT_FAILURE,
}


def build_runner(args) -> UpdateRunner:
    """Wire the manifest store, hash source and builder from parsed flags."""
    root = Path(args.root).resolve()
    manifest = root / args.manifest
    source = determine_hash_source(args.hash_source, timeout=args.timeout)
    builder = NixBuilder(root, args.attr)

    tools = list(getattr(source, "required_tools", ()))
    if not args.check:
        tools.extend(builder.required_tools)
    ensure_preflight(root, root / DEFAULT_FLAKE, manifest, tools)

    post_commit = None
    if not args.no_flake_update:
        post_commit = FlakeLockRefresh(root, args.manifest)
    return UpdateRunner(
        ManifestStore(manifest),
        source,
        builder,
        args.url,
        post_commit=post_commit,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool; returns the process exit code."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        err(str(e))
        build_parser().print_usage(sys.stderr)
        return EXIT_FAILURE

    try:
        configure_logging(args.verbose, args.log_file, args.log_json, args.log_level)
    except OSError as e:
        err(f"cannot open log file {args.log_file}: {e.strerror or e}")
        return EXIT_FAILURE
    try:
        runner = build_runner(args)
        if args.check:
            result = runner.check(force=args.force)
        else:
            result = runner.apply(force=args.force)
    except UpdaterError as e:
        err(str(e))
        log_event("run_failed", error_type=type(e).__name__)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        warn("Aborted by user.")
        return EXIT_INTERRUPTED
    return EXIT_CODES[result.state]


__all__ = ["main", "build_runner", "EXIT_CODES"]
