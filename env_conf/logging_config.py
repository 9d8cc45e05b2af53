"""
Logging Configuration for env_conf

Provides structured JSON logging or human-readable text logging for the
``env_conf`` logger namespace.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Optional

if TYPE_CHECKING:
    from .registry import ConfigRegistry

LOGGER_NAME = "env_conf"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    format: Literal["json", "text"] = "json",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure logging for env_conf.

    Args:
        level: Logging level
        format: Log format (json or text)
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level))

    # Remove existing handlers
    logger.handlers.clear()

    if format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def configure_logging_from_config(
    registry: "ConfigRegistry",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure logging from ``LOG_LEVEL`` and ``LOG_FORMAT``.

    Both are resolved through the registry, so environment, override files
    and defaults apply. Unknown values fall back to INFO and json.
    """
    level = str(registry.get("LOG_LEVEL") or "INFO").upper()
    if level not in LOG_LEVELS:
        level = "INFO"

    format = str(registry.get("LOG_FORMAT") or "json").lower()
    if format not in LOG_FORMATS:
        format = "json"

    return configure_logging(level=level, format=format, log_file=log_file)
