"""
Mana Logging Configuration

Library modules only call structlog.get_logger(); configuring output is
left to the application. The CLI calls configure_logging() once at start
so that log lines go to stderr and never mix with printed data.

The level comes from the MANA_LOG_LEVEL environment variable (default
WARNING) unless passed explicitly.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

import structlog

LOG_LEVEL_ENV = "MANA_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.WARNING)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: Optional[int] = None, stream: Optional[TextIO] = None) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            level if level is not None else get_log_level()
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream or sys.stderr),
    )
