"""Logging setup for the gateway process and uvicorn."""

import logging
import logging.config
from typing import Any, Dict

SUPPRESSED_ACCESS_PATHS = ("/health",)


class HealthCheckFilter(logging.Filter):
    """Drops uvicorn access lines for probe endpoints."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not any(f"GET {path} " in message for path in SUPPRESSED_ACCESS_PATHS)


def _handler(formatter: str, *filters: str) -> Dict[str, Any]:
    handler = {"class": "logging.StreamHandler", "formatter": formatter, "stream": "ext://sys.stdout"}
    if filters:
        handler["filters"] = list(filters)
    return handler


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build a dictConfig mapping.

    Args:
        level: Level for the application's own loggers

    Returns:
        Mapping for logging.config.dictConfig and uvicorn's log_config
    """
    def logger(handler: str, logger_level: str) -> Dict[str, Any]:
        return {"handlers": [handler], "level": logger_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"health": {"()": HealthCheckFilter}},
        "formatters": {
            "app": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "app": _handler("app"),
            "access": _handler("access", "health"),
        },
        "loggers": {
            "authgate": logger("app", level.upper()),
            "uvicorn.error": logger("app", "INFO"),
            "uvicorn.access": logger("access", "INFO"),
        },
        "root": {"level": "WARNING", "handlers": ["app"]},
    }


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level))
