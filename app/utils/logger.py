"""Structured logging configuration using structlog.

Sets up one processor chain for the gateway and the chat client:
- JSON output in production, colored console output in development
- request_id and other bound context merged in via contextvars
- ISO timestamp and level on every event

Usage:
    from app.utils.logger import setup_logging

    setup_logging(log_level="INFO", log_format="json")

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("event_name", key="value")
"""
from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", log_format: str = "json", stream=None) -> None:
    """Configure structlog for the entire application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Output format, 'json' for production, 'console' for dev.
        stream: File object to write events to (defaults to stdout). The
            terminal client passes stderr so logs don't mix with the chat.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )

    # httpx and werkzeug log through stdlib logging
    logging.basicConfig(format="%(message)s", level=level, stream=stream or sys.stdout)
