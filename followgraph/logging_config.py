"""
Centralized logging configuration for followgraph.

Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: "TRACE", "DEBUG", "INFO" (default), "WARNING" or "ERROR"
               - DEBUG: graph mutations
               - TRACE: every query with its result size

Usage:
    from followgraph.logging_config import configure_logging, get_logger

    configure_logging(source="demo")
    logger = get_logger(__name__)
    logger.info("Graph ready")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime

# Custom TRACE level for very verbose diagnostics
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 timestamps in UTC.

    Output format: 2026-01-06T14:05:52Z [source] LEVEL message
    """

    def __init__(self, source: str = "followgraph"):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            message = f"{message}\n{exception_text}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def configure_logging(
    source: str | None = None,
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Configure logging for a followgraph entry point.

    Args:
        source: Source identifier for log messages (defaults to LOG_SOURCE)
        level: Logging level (defaults to LOG_LEVEL from settings)
        debug: Enable debug mode (overrides level to DEBUG)

    Returns:
        Configured root logger
    """
    from followgraph.settings import get_settings

    settings = get_settings()
    if source is None:
        source = settings.log_source

    if level is None:
        level = logging.DEBUG if debug else logging.getLevelName(settings.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
