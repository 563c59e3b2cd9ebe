"""
Logging configuration and helpers shared by services and endpoints.
"""
import logging
import logging.config
from typing import Any, Optional

LOGGER_NAME = "moodflow"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO") -> None:
    """Configure root and application loggers."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["console"], "level": level, "propagate": False},
            "uvicorn.access": {"level": "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })


def _format_context(context: dict) -> str:
    parts = [f"{key}={value}" for key, value in context.items() if value not in (None, "")]
    return f" ({', '.join(parts)})" if parts else ""


def log_info(message: str, **context: Any) -> None:
    logger.info(f"{message}{_format_context(context)}")


def log_warning(message: str, **context: Any) -> None:
    logger.warning(f"{message}{_format_context(context)}")


def log_error(exc: BaseException, request_id: Optional[str] = None, **context: Any) -> None:
    """Log an exception with its traceback and optional request context."""
    context["request_id"] = request_id
    logger.error(
        f"{type(exc).__name__}: {exc}{_format_context(context)}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
