"""Logging configuration using structlog."""

import logging
import sys

import structlog

from ticker_stats.config import LoggingConfig, get_settings


def setup_logging(level: str | None = None, config: LoggingConfig | None = None) -> None:
    """
    Configure structured logging for aggregation runs.

    Args:
        level: Log level override (DEBUG, INFO, WARNING, ERROR)
        config: Logging configuration. If None, uses the global settings,
            whose level honors TICKER_STATS_LOG_LEVEL.
    """
    config = config or get_settings().logging
    log_level = getattr(logging, (level or config.level).upper())

    if config.json_output:
        renderer = structlog.processors.JSONRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
