"""
Learning Site Page Generator - Structured Logging Configuration
===============================================================
Provides JSON-formatted structured logging with build context.

Features:
- JSON output for CI log aggregation
- Build-scoped context (build_id, content_type)
- Duration tracking for each generation step
- Log level filtering via environment

Usage:
    from src.logging_config import configure_logging, log_event

    configure_logging(log_format="console")
    logger = logging.getLogger(__name__)
    logger.info("Pages registered", extra={"page_count": 20})

    # Or use the helper
    log_event("manifest_written", path="public/filters-tracks.json")
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
import time
import traceback
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class LogLevel(str, Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# Build Context
# =============================================================================


class LogContext:
    """
    Thread-local storage for build-scoped log context.

    The generator is single-threaded, but keeping the context thread-local
    lets tests run builds side by side without leaking ids.
    """

    _local = threading.local()

    @classmethod
    def set_build_id(cls, build_id: str | None) -> None:
        """Set the current build ID."""
        cls._local.build_id = build_id

    @classmethod
    def get_build_id(cls) -> str | None:
        """Get the current build ID."""
        return getattr(cls._local, "build_id", None)

    @classmethod
    def set_content_type(cls, content_type: str | None) -> None:
        """Set the content type currently being generated."""
        cls._local.content_type = content_type

    @classmethod
    def get_content_type(cls) -> str | None:
        """Get the content type currently being generated."""
        return getattr(cls._local, "content_type", None)

    @classmethod
    def clear(cls) -> None:
        """Clear all context."""
        cls._local.build_id = None
        cls._local.content_type = None

    @classmethod
    def get_all(cls) -> dict[str, Any]:
        """Get all context as a dict."""
        return {
            "build_id": cls.get_build_id(),
            "content_type": cls.get_content_type(),
        }


# =============================================================================
# JSON Formatter
# =============================================================================

_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname",
        "filename", "module", "lineno", "funcName", "created", "msecs",
        "relativeCreated", "thread", "threadName", "processName",
        "process", "getMessage", "exc_info", "exc_text", "stack_info",
        "taskName", "message", "asctime",
    }
)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a consistent JSON format with timestamps,
    log levels, and contextual fields.
    """

    def __init__(
        self,
        *,
        service_name: str = "learning-site-pagegen",
        environment: str = "production",
        include_extra_fields: bool = True,
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.environment = environment
        self.include_extra_fields = include_extra_fields
        self._iso_format = "%Y-%m-%dT%H:%M:%S.%fZ"

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": self.environment,
        }

        if record.pathname:
            log_entry["file"] = Path(record.pathname).name
            log_entry["line"] = record.lineno
            log_entry["function"] = record.funcName

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self._format_traceback(record.exc_info),
            }

        for key, value in LogContext.get_all().items():
            if value is not None:
                log_entry[key] = value

        # Anything passed through `extra=` lands on the record itself
        if self.include_extra_fields:
            for key, value in record.__dict__.items():
                if key not in _STANDARD_ATTRS and not key.startswith("_"):
                    log_entry[key] = value

        return json.dumps(log_entry, default=self._json_serializer, ensure_ascii=False)

    def _format_timestamp(self, created: float) -> str:
        """Format Unix timestamp to ISO 8601 string."""
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime(self._iso_format)

    def _format_traceback(self, exc_info: Any) -> str | None:
        """Format exception traceback."""
        if not exc_info:
            return None
        return "".join(traceback.format_exception(*exc_info))

    @staticmethod
    def _json_serializer(obj: Any) -> str:
        """Custom JSON serializer for non-serializable objects."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


# =============================================================================
# Console Formatter (human-readable fallback)
# =============================================================================


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for local builds.
    """

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, *, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console."""
        level_color = self.LEVEL_COLORS.get(record.levelname, "") if self.use_color else ""
        reset = self.RESET if self.use_color else ""
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        content_type = LogContext.get_content_type() or "-"

        base = (
            f"{level_color}{record.levelname:<8}{reset} "
            f"{timestamp} "
            f"[{content_type}] "
            f"{record.name}: "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return base


# =============================================================================
# Logger Factory
# =============================================================================


def _get_log_level() -> int:
    """Get log level from environment."""
    level_str = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def _should_use_json() -> bool:
    """Determine if JSON logging should be used."""
    log_format = os.environ.get("LOG_FORMAT", "").lower()
    if log_format == "console":
        return False
    if log_format == "json":
        return True
    # CI runs are not attached to a terminal
    return not sys.stdout.isatty()


def configure_logging(
    *,
    level: str | int | None = None,
    service_name: str = "learning-site-pagegen",
    environment: str = "production",
    log_format: str | None = None,
) -> None:
    """
    Configure the root logger with structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Service name for log identification
        environment: Environment label (production, preview, development)
        log_format: Format type ("json" or "console")
    """
    resolved_level = _get_log_level() if level is None else _convert_level(level)
    root = logging.getLogger()
    root.setLevel(resolved_level)
    root.handlers.clear()

    use_json = _should_use_json() if log_format is None else log_format == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved_level)
    if use_json:
        handler.setFormatter(
            StructuredFormatter(
                service_name=service_name,
                environment=environment,
            )
        )
    else:
        handler.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))

    root.addHandler(handler)


def _convert_level(level: str | int) -> int:
    """Convert log level string to int constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


# =============================================================================
# Helper Functions
# =============================================================================


def log_event(
    event_name: str,
    level: str | LogLevel = LogLevel.INFO,
    **extra_fields: Any,
) -> None:
    """
    Log a structured event with additional fields.

    Example:
        log_event("listing_generated", collection="tracks", page_count=3)
    """
    logger = logging.getLogger("src.event")
    level_name = level.value if isinstance(level, LogLevel) else str(level)
    log_func = getattr(logger, level_name.lower(), logger.info)
    log_func(event_name, extra=extra_fields)


def log_error(
    event_name: str,
    exc: BaseException | None = None,
    **extra_fields: Any,
) -> None:
    """Log an error event with optional exception info."""
    logger = logging.getLogger("src.error")
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    logger.error(event_name, exc_info=exc_info, extra=extra_fields)


# =============================================================================
# Context Managers
# =============================================================================


class BuildLogContext:
    """
    Context manager for build-scoped log context.

    Example:
        with BuildLogContext(content_type="challenge"):
            logger.info("Generating challenge pages")
    """

    def __init__(
        self,
        *,
        build_id: str | None = None,
        content_type: str | None = None,
    ) -> None:
        self.build_id = build_id or LogContext.get_build_id() or str(uuid.uuid4())
        self.content_type = content_type
        self._previous: dict[str, Any] = {}

    def __enter__(self) -> BuildLogContext:
        self._previous = LogContext.get_all()
        LogContext.set_build_id(self.build_id)
        LogContext.set_content_type(self.content_type)
        return self

    def __exit__(self, *args: Any) -> None:
        LogContext.set_build_id(self._previous.get("build_id"))
        LogContext.set_content_type(self._previous.get("content_type"))


class PerformanceTracker:
    """
    Context manager for tracking how long a generation step takes.

    Example:
        with PerformanceTracker("challenge_pages", collection="challenges"):
            await create_challenge_pages(...)
    """

    def __init__(
        self,
        operation: str,
        **extra_fields: Any,
    ) -> None:
        self.operation = operation
        self.extra = extra_fields
        self.duration_ms: float | None = None
        self._start_time: float | None = None

    def __enter__(self) -> PerformanceTracker:
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        if self._start_time is None:
            return

        self.duration_ms = round((time.perf_counter() - self._start_time) * 1000, 2)
        self.extra["duration_ms"] = self.duration_ms

        logger = logging.getLogger("src.performance")
        if args[0] is not None:
            self.extra["error"] = str(args[1])
            logger.warning(f"{self.operation}_failed", extra=self.extra)
        else:
            logger.info(f"{self.operation}_completed", extra=self.extra)
