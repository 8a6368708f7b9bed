"""
Logging Configuration - Audition Judging Platform
judging/logging_config.py

Configures structlog once at application start-up. LOG_FORMAT selects the
JSON renderer (production) or the console renderer (local development).
"""
import logging
import sys

import structlog

from judging.config import settings


def configure_logging(level: str = None, log_format: str = None) -> None:
    """Configure stdlib logging and structlog with a shared level and renderer."""
    level_name = level or settings.LOG_LEVEL
    fmt = log_format or settings.LOG_FORMAT
    log_level = getattr(logging, level_name)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
