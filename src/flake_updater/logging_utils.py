"""Logging configuration helpers (human + JSON + file).

This module centralizes lightweight logging setup for the CLI:
 - Plain human-readable logs to stderr
 - Optional JSON lines to stderr (stdout carries the check-mode report)
 - Optional file logs

Configuration is idempotent so tests and repeated calls do not stack
duplicate handlers.
"""

from __future__ import annotations
import json
import logging
import sys
from typing import Optional

_STRUCTURED_FIELDS = (
    "event",
    "path",
    "url",
    "version",
    "hash",
    "candidate",
    "has_update",
    "forced",
    "duration_ms",
    "error_type",
    "check",
    "success",
)


class JSONFormatter(logging.Formatter):
    """Minimal JSON formatter for structured log collection.

    Emits an object with ``level`` and ``message`` plus any structured fields
    set via ``extra=...`` (see :data:`_STRUCTURED_FIELDS`).
    """

    def format(self, record):
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for k in _STRUCTURED_FIELDS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        return json.dumps(payload, default=str)


def configure_logging(
    verbose: bool,
    log_file: Optional[str] = None,
    log_json: bool = False,
    log_level: Optional[str] = None,
) -> None:
    """Configure the root logger according to CLI flags.

    Parameters
    - ``verbose``: When ``True``, sets level to ``DEBUG`` (unless ``log_level``
      overrides). Otherwise defaults to ``WARNING``.
    - ``log_file``: Optional path to tee logs to a file (plain text format).
    - ``log_json``: When ``True``, also emit JSON lines to stderr.
    - ``log_level``: Optional explicit level name (debug, info, warning, error).

    Handlers previously added by this function are removed first.
    """

    if log_level:
        level = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }.get(log_level.lower(), logging.WARNING)
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, "_added_by_configure_logging", False):
            logger.removeHandler(h)
            h.close()

    fmt = "%(levelname)s: %(message)s"
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(fmt))
    setattr(stream, "_added_by_configure_logging", True)
    logger.addHandler(stream)

    if log_json:
        json_handler = logging.StreamHandler(sys.stderr)
        json_handler.setFormatter(JSONFormatter())
        setattr(json_handler, "_added_by_configure_logging", True)
        logger.addHandler(json_handler)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s " + fmt))
        setattr(fh, "_added_by_configure_logging", True)
        logger.addHandler(fh)

    for handler in logger.handlers:
        handler.setLevel(level)


def log_event(event: str, level: int = logging.INFO, **fields) -> None:
    """Emit a structured event log at the given level.

    Common ``fields`` include ``path``, ``version``, ``hash`` and
    ``duration_ms``. The function never raises.
    """
    try:
        logging.getLogger("flake_updater").log(
            level, event, extra={"event": event, **fields}
        )
    except Exception:
        # Never let logging break CLI flow
        pass


__all__ = ["configure_logging", "log_event", "JSONFormatter"]
