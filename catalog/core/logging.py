"""Structured logging configuration for the catalog.

Provides JSON-formatted logs with context tracking (game ids, visibility
context, operation timings) and a human-readable format for development.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import traceback

from catalog.core.config import settings


CONTEXT_FIELDS = (
    "game_id",
    "context",
    "operation",
    "duration_ms",
    "error_code",
    "record_count",
    "dropped_count",
    "filters",
    "sort_mode",
    "store",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs one JSON object per record with timestamp, level, message,
    module, function and any known catalog context fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string.

        Args:
            record: LogRecord to format

        Returns:
            JSON string with log data
        """
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        for attr in CONTEXT_FIELDS:
            if hasattr(record, attr):
                log_obj[attr] = getattr(record, attr)

        return json.dumps(log_obj, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that includes context in all log messages.

    Example:
        >>> logger = ContextLogger(base_logger, {"context": "admin"})
        >>> logger.info("Archiving game", extra={"game_id": "azul"})
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs['extra'] = extra
        return msg, kwargs


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``catalog`` logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Whether to use JSON formatter (True for production)

    Returns:
        Configured package logger
    """
    package_logger = logging.getLogger("catalog")
    package_logger.setLevel(getattr(logging, level.upper()))
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter = JSONFormatter()
    else:
        fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        formatter = logging.Formatter(fmt)

    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    return package_logger


def get_logger(name: str, context: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Get a logger with optional context.

    Args:
        name: Logger name (typically __name__ of module)
        context: Optional context dict to include in all logs

    Returns:
        Logger or ContextLogger if context provided
    """
    logger = logging.getLogger(name)

    if context:
        return ContextLogger(logger, context)

    return logger


class LogTimer:
    """Context manager for timing an I/O boundary and logging its duration.

    Example:
        >>> with LogTimer(logger, "load_games"):
        ...     records = loader()
        # Logs: "load_games completed in 3.2ms"
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[datetime] = None

    def __enter__(self):
        self.start_time = datetime.now(timezone.utc)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            duration = (datetime.now(timezone.utc) - self.start_time).total_seconds() * 1000

            if exc_type:
                self.logger.warning(
                    f"{self.operation} failed after {duration:.1f}ms",
                    extra={"operation": self.operation, "duration_ms": duration},
                )
            else:
                self.logger.log(
                    self.level,
                    f"{self.operation} completed in {duration:.1f}ms",
                    extra={"operation": self.operation, "duration_ms": duration}
                )
        return False


# Initialize logging on module import (can be reconfigured later)
setup_logging(level=settings.log_level, json_format=settings.json_logs)
