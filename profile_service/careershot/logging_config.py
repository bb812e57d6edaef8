"""
Logging setup for the profile lookup service.

Format: 2026-01-06T14:05:52Z [api] INFO message

LOG_LEVEL selects the level: INFO (default), DEBUG, or TRACE for very
verbose store-level diagnostics.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class ISO8601Formatter(logging.Formatter):
    """Formatter producing `<utc timestamp> [source] LEVEL message` lines."""

    def __init__(self, source: str = "app"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Drop /health access-log lines unless running at DEBUG."""

    HEALTH_PATHS = {"/health"}

    def filter(self, record: logging.LogRecord) -> bool:
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            return True
        message = record.getMessage()
        return all(not (path in message and "GET" in message) for path in self.HEALTH_PATHS)


def _level_from_env() -> int:
    name = os.getenv("LOG_LEVEL", "").upper()
    if name == "TRACE":
        return TRACE
    if name == "DEBUG":
        return logging.DEBUG
    return logging.INFO


def configure_logging(source: str = "api", level: int | None = None) -> logging.Logger:
    """Install the unified handler on the root and uvicorn loggers."""
    if level is None:
        level = _level_from_env()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in list(root_logger.handlers):
        if getattr(existing, "_careershot", False):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler._careershot = True  # type: ignore[attr-defined]
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    root_logger.addHandler(handler)

    # uvicorn installs its own handlers; route them through ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False

    logging.getLogger("azure").setLevel(logging.WARNING)
    return root_logger
