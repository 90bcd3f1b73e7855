"""Logging configuration for the TeamCity REST client."""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

import structlog

from .config import settings


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration.

    The library itself only emits events through structlog; applications
    (and the CLI) call this once to decide where those events go.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, console)
        log_file: Optional log file path
    """
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format
    log_file = log_file or settings.log_file

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        render_chain = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # stderr, so command output on stdout stays clean
        render_chain = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers = ["console"]
    if log_file:
        handlers.append("file")

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": [
                    structlog.stdlib.add_logger_name,
                    structlog.stdlib.add_log_level,
                    structlog.processors.TimeStamper(fmt="iso"),
                ],
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    *render_chain,
                ],
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "formatter": "structured",
            },
        },
        "loggers": {
            "": {
                "handlers": handlers,
                "level": log_level,
                "propagate": True,
            },
            "httpx": {
                "handlers": handlers,
                "level": "WARNING",
                "propagate": False,
            },
            "httpcore": {
                "handlers": handlers,
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_path),
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "formatter": "structured",
        }

    logging.config.dictConfig(logging_config)

    logger = structlog.get_logger(__name__)
    logger.debug("Logging configured", level=log_level, format=log_format, file=log_file)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def log_teamcity_api_call(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    duration_ms: float,
    **kwargs
) -> None:
    """Log TeamCity API call details.

    Args:
        logger: Logger instance
        method: HTTP method
        path: Resource path
        duration_ms: Request duration in milliseconds
        **kwargs: Additional context
    """
    logger.debug(
        "TeamCity API call completed",
        method=method,
        path=path,
        duration_ms=duration_ms,
        **kwargs
    )
