"""
Shared Logger

Logging setup for the scheduling engine. Services and repositories log
through ``ContextLogger``, whose keyword fields travel on the record as
``extra_data`` and are rendered by the formatters below.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            log_data["extra"] = extra_data

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter with colored levels and a ``key=value`` context suffix."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"

        message = super().format(record)
        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            context = " ".join(f"{key}={value}" for key, value in extra_data.items())
            message = f"{message} | {context}"
        return message


class ContextLogger:
    """
    Logger that attaches fixed context plus per-call fields.

    Example:
        ```python
        log = get_service_logger("appointment_lifecycle")
        log.info("Appointment confirmed", appointment_id=appointment.id)
        ```
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        self._logger = logging.getLogger(name)
        self._context = context or {}

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def log(self, level: int, message: str, **fields: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra={"extra_data": {**self._context, **fields}})

    def debug(self, message: str, **fields: Any) -> None:
        self.log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(logging.WARNING, message, **fields)


def _console_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter()
    if format_type == "colored":
        return ColoredFormatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)


def configure_logging(
    level: str = "INFO",
    format_type: str = "colored",
    log_file: str | None = None,
) -> None:
    """
    Replace the root handlers with a console handler and an optional JSON file handler.

    Args:
        level: Log level name (case-insensitive)
        format_type: 'colored', 'json' or 'plain' for the console
        log_file: File that receives JSON lines
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(_console_formatter(format_type))
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)


def configure_logging_from_settings(settings: Any) -> None:
    """Apply LOG_LEVEL, LOG_FORMAT and LOG_FILE and quiet SQLAlchemy unless DB_ECHO is set."""
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)

    sqlalchemy_level = logging.INFO if settings.DB_ECHO else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextLogger:
    return ContextLogger(name, context)


def get_service_logger(service_name: str) -> ContextLogger:
    return get_logger(f"service.{service_name}", {"component": "service", "service": service_name})


def get_repository_logger(repo_name: str) -> ContextLogger:
    return get_logger(f"repository.{repo_name}", {"component": "repository", "repository": repo_name})
