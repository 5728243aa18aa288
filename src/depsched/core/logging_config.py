"""Centralized logging configuration for depsched.

Library modules only ask for loggers; handlers are installed once by the
application (the CLI does this at startup).

Usage:
    from depsched.core.logging_config import configure_logging, get_logger

    # Configure once at application startup
    configure_logging(level="DEBUG", format="text")

    # Get loggers in modules
    logger = get_logger(__name__)

Environment Variables:
    DEPSCHED_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DEPSCHED_LOG_FORMAT: Output format ("text" or "json")
    DEPSCHED_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_FORMAT_WITH_MS = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)

_configured = False


@dataclass
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: Output format ("text" or "json").
        file_path: Optional file path for file logging.
        include_ms: Include milliseconds in timestamp.
    """

    level: str = "WARNING"
    format: Literal["text", "json"] = "text"
    file_path: str | None = None
    include_ms: bool = True

    @classmethod
    def from_env(cls) -> LogConfig:
        """Build a config from DEPSCHED_LOG_* environment variables."""
        fmt = os.environ.get("DEPSCHED_LOG_FORMAT", "text").lower()
        if fmt not in ("text", "json"):
            raise ValueError(f"DEPSCHED_LOG_FORMAT must be 'text' or 'json', got '{fmt}'")
        return cls(
            level=os.environ.get("DEPSCHED_LOG_LEVEL", "WARNING").upper(),
            format=fmt,  # type: ignore[arg-type]
            file_path=os.environ.get("DEPSCHED_LOG_FILE") or None,
        )


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs logs as JSON objects with consistent structure:
    {
        "timestamp": "2025-12-28T14:30:00.123",
        "level": "INFO",
        "logger": "depsched.core.scheduler",
        "message": "task_complete: task=build (1.2ms)",
        "extra": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def _resolve_level(level: str) -> int:
    value = getattr(logging, level.upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"Invalid log level: {level}")
    return value


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    include_ms: bool = True,
    force: bool = False,
) -> None:
    """Configure logging for the application.

    This should be called once at application startup. Subsequent calls
    are ignored unless force=True. Explicit arguments win over the
    DEPSCHED_LOG_* environment variables.

    Args:
        level: Log level. Defaults to DEPSCHED_LOG_LEVEL or "WARNING".
        format: Output format. Defaults to DEPSCHED_LOG_FORMAT or "text".
        file_path: Optional file path. Defaults to DEPSCHED_LOG_FILE.
        include_ms: Include milliseconds in timestamp.
        force: Force reconfiguration even if already configured.

    Raises:
        ValueError: If the level or format is not recognized.
    """
    global _configured
    if _configured and not force:
        return

    env = LogConfig.from_env()
    config = LogConfig(
        level=level or env.level,
        format=format or env.format,
        file_path=file_path or env.file_path,
        include_ms=include_ms,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(config.level))
    root_logger.handlers.clear()

    if config.format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        fmt = TEXT_FORMAT_WITH_MS if config.include_ms else TEXT_FORMAT
        formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file_path:
        file_handler = logging.FileHandler(config.file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (typically __name__)."""
    return logging.getLogger(name)


def set_level(level: str, logger_name: str | None = None) -> None:
    """Set log level for a specific logger or the root logger."""
    logging.getLogger(logger_name).setLevel(_resolve_level(level))
