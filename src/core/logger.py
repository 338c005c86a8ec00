import logging
import sys
from logging.handlers import RotatingFileHandler

import structlog

from core.config import settings


FILE_LOGGER_NAME = "recipe_share"


def _file_logger_factory(level: int):
    # stdlib handlers carry the rendered lines to stdout and the rotating file
    file_logger = logging.getLogger(FILE_LOGGER_NAME)
    for handler in list(file_logger.handlers):
        file_logger.removeHandler(handler)
        handler.close()
    file_logger.setLevel(level)
    file_logger.propagate = False

    formatter = logging.Formatter("%(message)s")
    handlers = [
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=settings.LOG_FILE_MAX_BYTES,
            backupCount=settings.LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        ),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        file_logger.addHandler(handler)

    return lambda *args: file_logger


def configure_logging() -> None:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer()
    )

    logger_factory = (
        _file_logger_factory(level) if settings.LOG_FILE else structlog.WriteLoggerFactory()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    # stays a lazy proxy so configure_logging() at startup still applies
    return structlog.get_logger(module=name)
