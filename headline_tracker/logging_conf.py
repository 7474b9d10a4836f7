"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import structlog

_LOGGING_INITIALISED = False


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return the application logger."""

    global _LOGGING_INITIALISED

    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "INFO"
        handlers: dict[str, dict] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json",
            },
        }
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            handlers["tracker_file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "filename": str(log_dir / "tracker.log"),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 3,
                "encoding": "utf-8",
                "formatter": "json",
            }
            handlers["error_file"] = {
                "class": "logging.FileHandler",
                "level": "ERROR",
                "filename": str(log_dir / "error.log"),
                "encoding": "utf-8",
                "formatter": "json",
            }
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "json": {
                        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    "headline_tracker": {
                        "handlers": list(handlers),
                        "level": level,
                        "propagate": False,
                    },
                    "apscheduler": {
                        "handlers": list(handlers),
                        "level": "WARNING",
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                # JSON rendering happens in the stdlib formatter
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("headline_tracker")


def component_logger(component: str) -> structlog.BoundLogger:
    return structlog.get_logger("headline_tracker").bind(component=component)


__all__ = ["component_logger", "configure_logging"]
