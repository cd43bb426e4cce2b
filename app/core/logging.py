"""Logging configuration using structlog."""

import logging
import sys
from typing import TextIO

import structlog

from app.core.config import get_settings


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure structlog for the application.

    Commands that print results on stdout pass ``sys.stderr`` so log records
    never mix with their output.
    """
    settings = get_settings()
    stream = stream or sys.stdout
    level = getattr(logging, settings.app.log_level.value)

    logging.basicConfig(format="%(message)s", stream=stream, level=level)
    # Statement logging is routed through the same handler when DATABASE_ECHO is on.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database.echo else logging.WARNING
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.observability.log_record_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(
        service=settings.observability.service_name,
        env=settings.app.env.value,
    )
