"""Aggregated CLI argument groups (argsets).

Small helpers that attach related groups of arguments to an
``argparse.ArgumentParser``:
  - add_general_args(parser, version)
  - add_mode_args(parser)
  - add_source_args(parser)
"""

from __future__ import annotations

from .general import add_general_args
from .mode import add_mode_args
from .source import add_source_args

__all__ = ["add_general_args", "add_mode_args", "add_source_args"]
