"""Structlog-based logging for family-timeline.

Library modules log through ``structlog.get_logger(__name__)`` and never
print. Nothing is configured at import time; the CLI calls
``configure_logging`` once, and embedding applications bring their own
structlog setup.
"""
from __future__ import annotations

import logging
import sys
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "INFO") -> None:
    """Emit JSON log lines on stderr, keeping stdout for command output."""
    numeric = getattr(logging, level)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        # Module-level proxies must follow a later reconfiguration
        cache_logger_on_first_use=False,
    )
