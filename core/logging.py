"""structlog setup shared by the API and library callers."""
import logging
import sys

import structlog

from core.settings import SETTINGS


def configure_logging(
    level: str = SETTINGS.APP.LOG_LEVEL, json_logs: bool = SETTINGS.APP.JSON_LOGS
) -> None:
    """Configure stdlib logging and structlog with one level and renderer.

    JSON output is meant for deployed environments; the console renderer is
    easier to read locally.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
    )
