"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module only
owns process-wide configuration plus small helpers for structured DEBUG
traces (``extra_context``) and timing (``Timer``).
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "depmeta-console"


def _resolve_level(level: Optional[str]) -> int:
    """Translate a level name into a logging level, defaulting to INFO."""
    if not level:
        return logging.INFO
    value = getattr(logging, str(level).strip().upper(), None)
    if isinstance(value, int):
        return value
    return logging.INFO


def configure_logging(level: Optional[str] = None, stream=None) -> None:
    """Configure the root logger once for CLI usage.

    The level comes from ``level`` when given, otherwise from the
    DEPMETA_LOG_LEVEL environment variable. Calling this again replaces the
    console handler instead of stacking a second one.
    """
    root = logging.getLogger()
    if level is None:
        level = os.environ.get(Constants.ENV_LOG_LEVEL)

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def add_file_handler(path: str) -> logging.Handler:
    """Attach a file handler using the standard log format."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted for ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    None values are dropped so records only carry the fields that apply.
    """
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self):
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; measured up to now while still running."""
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
