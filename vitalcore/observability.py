"""Structured logging setup shared by every module that calls ``structlog.get_logger``."""

import logging

import structlog

from vitalcore.config import LoggingConfig, get_config


def configure_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    JSON output for machines, console output for local development.
    """
    config = config or get_config().logging

    logging.basicConfig(format="%(message)s", level=getattr(logging, config.level))
    logging.getLogger().setLevel(getattr(logging, config.level))

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format == "json"
        else structlog.dev.ConsoleRenderer()
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
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
