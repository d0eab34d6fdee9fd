"""
Shared Logger

Centralized logging configuration for the application.

Engine services log through ``ContextLogger`` so that every line about an
order carries ``tenant_id`` and ``order_id`` without repeating them in each
message.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

LOG_LINE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter; appends context as key=value pairs."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format with colors."""
        # Work on a copy; other handlers share the same record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        line = super().format(record)

        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} | {pairs}"
        return line


class ContextLogger:
    """Logger that attaches a fixed context to every record."""

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        """
        Initialize context logger.

        Args:
            name: Logger name
            context: Default context to include in all logs
        """
        self._logger = logging.getLogger(name)
        self._context = context or {}

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def with_context(self, **kwargs) -> "ContextLogger":
        """Create new logger with additional context."""
        new_context = {**self._context, **{k: v for k, v in kwargs.items() if v is not None}}
        return ContextLogger(self._logger.name, new_context)

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._context, **kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra={"context": context}, stacklevel=3)

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log at ERROR level with the active traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)


def configure_logging(
    level: str = "INFO",
    format_type: str = "colored",
    log_file: str | None = None,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'colored', 'json', or 'plain'
        log_file: Optional file path for file logging (always JSON)
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if format_type == "json":
        console_handler.setFormatter(JSONFormatter())
    elif format_type == "colored":
        console_handler.setFormatter(ColoredFormatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__)
        context: Default context

    Returns:
        ContextLogger instance
    """
    return ContextLogger(name, context)


def get_service_logger(service_name: str) -> ContextLogger:
    """Get logger for application services."""
    return get_logger(f"service.{service_name}", {"component": "service", "service": service_name})
