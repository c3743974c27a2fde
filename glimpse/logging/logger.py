# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for glimpse.

A log entry is one JSON line: UTC timestamp, level, logger name and message,
followed by whatever the caller attached with `extra=`. Check findings,
render results and startup info all go through here; the package never
calls print().

    {"ts": "2026-...", "level": "WARNING", "module": "glimpse.checks", "msg": "finding", "line": 42}
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Keys present on a bare record; anything beyond these arrived through `extra`.
_STANDARD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class _Defaults:
    """Level and file for loggers requested without explicit settings."""

    level = "INFO"
    log_file: Optional[Path] = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; a traceback, if any, goes under "exc"."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_KEYS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _level_number(level_name: str) -> int:
    normalized = level_name.upper()
    if normalized not in LOG_LEVELS:
        raise ValueError(f"Invalid log level '{level_name}'. Expected one of {', '.join(LOG_LEVELS)}")
    return logging.getLevelName(normalized)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)


def _writes_to(logger: logging.Logger, destination: Path) -> bool:
    target = os.path.abspath(destination)
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in logger.handlers
    )


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Return the named logger, writing JSON lines to stdout and optionally a file.

    Args:
        name: Logger name, usually the calling module's __name__.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Falls back to the
                   level set with configure_defaults.
        log_file: Extra destination for the same lines. Falls back to the file
                  set with configure_defaults.

    Raises:
        ValueError: For an unknown level name.
    """
    level = _level_number(log_level or _Defaults.level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)
    if not logger.handlers:
        _attach(logger, logging.StreamHandler(stream=sys.stdout), level)

    # A logger created before bootstrap still picks up the log file later.
    destination = log_file or _Defaults.log_file
    if destination is not None and not _writes_to(logger, destination):
        destination.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(destination, encoding="utf-8"), level)

    return logger


def configure_defaults(level_name: str, log_file: Optional[Path] = None) -> None:
    """Set the level and log file get_logger uses when none are given."""
    _level_number(level_name)
    _Defaults.level = level_name.upper()
    _Defaults.log_file = log_file
