"""Structured logging for skillsync, written to stderr so stdout stays command output."""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV_VAR = "LOG_LEVEL"


def setup_logging(level_name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Configure structlog; the level comes from ``LOG_LEVEL`` unless given."""
    level_name = (level_name or os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger("skillsync")


logger: structlog.typing.FilteringBoundLogger = setup_logging()
