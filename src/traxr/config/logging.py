"""Logging configuration using structlog.

TRAXR logs snake_case events with keyword context. Production output is one
JSON object per line; ``TRAXR_DEBUG`` switches to the console renderer.
"""

import logging
import sys

import structlog

from traxr.config.settings import Settings, get_settings

# Processors shared by every renderer
_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]

# APScheduler logs every job run at INFO; the refresh job logs its own outcome
_QUIET_LOGGERS = ("apscheduler.executors", "apscheduler.scheduler")


def _renderer(settings: Settings) -> structlog.types.Processor:
    if settings.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging from settings.

    Args:
        settings: Settings to read level and debug flag from
            (default: cached environment settings).
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)

    structlog.configure(
        processors=[*_PROCESSORS, _renderer(settings)],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    quiet_level = level if settings.debug else max(level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
