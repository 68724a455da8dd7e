"""
Logging configuration for storecast.

This module configures structlog for JSON logging across the application.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from .settings import settings


def render_clock_fields(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add an HH:MM:SS rendering next to every ``*_at_seconds`` offset in a log event."""
    for key in list(event_dict.keys()):
        if not key.endswith("_at_seconds"):
            continue
        value = event_dict[key]
        if isinstance(value, int) and value >= 0:
            h, r = divmod(value, 3600)
            m, s = divmod(r, 60)
            event_dict[key[: -len("_seconds")] + "_clock"] = f"{h:02d}:{m:02d}:{s:02d}"
    return event_dict


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for JSON logging on stderr."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=(level or settings.log_level).upper(),
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            render_clock_fields,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a configured logger with service context."""
    logger = structlog.get_logger(name)
    return logger.bind(
        service="storecast",
        env=settings.env,
    )
