#!/usr/bin/env python3
"""Launcher for flake-hash-updater.

Runs the packaged CLI from a plain repository checkout (no install needed)
and from installed or frozen distributions alike:
 - Prefer static imports so packagers can see the ``flake_updater`` package.
 - Fall back to adding ``./src`` to ``sys.path`` when running the repository
   directly.
 - Re-export key symbols so tests and scripts can import them from here.
"""

import importlib
import os as _os
import sys
from pathlib import Path


def _load_modules():
    """Locate and import the packaged modules.

    Returns a tuple of (main_flow_module, utils_module).
    """
    try:
        from flake_updater import main_flow as _main_flow  # type: ignore
        from flake_updater import utils as _utils  # type: ignore

        return _main_flow, _utils
    except ImportError:
        pass

    _here = Path(__file__).resolve().parent
    _src = _here / "src"
    if _src.exists():
        src_str = str(_src)
        if src_str not in sys.path:
            sys.path.insert(0, src_str)
        env_path = _os.environ.get("PYTHONPATH")
        if env_path:
            paths = env_path.split(_os.pathsep)
            if src_str not in paths:
                _os.environ["PYTHONPATH"] = _os.pathsep.join([src_str, env_path])
        else:
            _os.environ["PYTHONPATH"] = src_str

    _main_flow = importlib.import_module("flake_updater.main_flow")
    _utils = importlib.import_module("flake_updater.utils")
    return _main_flow, _utils


_main_flow, _utils = _load_modules()

main = _main_flow.main
build_runner = _main_flow.build_runner
EXIT_CODES = _main_flow.EXIT_CODES
parse_args = _main_flow.parse_args
get_version = _utils.get_version
pkg_version = _utils.pkg_version

__all__ = [
    "main",
    "build_runner",
    "EXIT_CODES",
    "parse_args",
    "get_version",
    "pkg_version",
]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
