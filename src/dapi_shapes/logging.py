"""
Structured Logging for dapi-shapes.

This module provides:
- Structured JSON or text logging with consistent fields
- Per-context operation tracking for correlating outbound and inbound translations

The package never installs handlers on its own; applications opt in with
``configure_logging``.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import IO, Any

from .config.logging import LoggingConfig

# =============================================================================
# Log Context
# =============================================================================


@dataclass(frozen=True)
class LogContext:
    """Context information attached to log records."""

    trace_id: str | None = None
    operation: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d = {k: v for k, v in asdict(self).items() if v is not None and k != "extra"}
        d.update(self.extra)
        return d

    def with_update(self, **kwargs) -> LogContext:
        """Create a new context with updated values."""
        return LogContext(
            trace_id=kwargs.get("trace_id", self.trace_id),
            operation=kwargs.get("operation", self.operation),
            extra={**self.extra, **kwargs.get("extra", {})},
        )


# one context per thread / asyncio task
_log_context: ContextVar[LogContext] = ContextVar("dapi_shapes_log_context", default=LogContext())


# =============================================================================
# Structured Logger
# =============================================================================


class StructuredLogger:
    """
    Logger with structured output and context tracking.

    Example:
        ```python
        logger = StructuredLogger("dapi_shapes", level="DEBUG")

        with logger.trace_context(operation="find"):
            logger.log_parameters(sanitized, dropped=["merge"])
        ```
    """

    def __init__(
        self,
        name: str = "dapi_shapes",
        level: str = "INFO",
        json_output: bool = False,
        include_timestamp: bool = True,
    ):
        self.name = name
        self.json_output = json_output
        self.include_timestamp = include_timestamp

        self._logger = logging.getLogger(name)
        self._logger.setLevel(getattr(logging, level.upper()))

    @classmethod
    def from_config(cls, config: LoggingConfig, name: str = "dapi_shapes") -> StructuredLogger:
        return cls(
            name=name,
            level=config.level,
            json_output=config.format == "json",
            include_timestamp=config.include_timestamp,
        )

    def attach_handler(self, stream: IO[str] | None = None) -> None:
        """Add a stream handler (stderr by default) unless one is present."""
        if self._logger.handlers:
            return
        handler = logging.StreamHandler(stream or sys.stderr)
        if self.json_output:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(TextFormatter(include_timestamp=self.include_timestamp))
        self._logger.addHandler(handler)

    @property
    def context(self) -> LogContext:
        return _log_context.get()

    @contextmanager
    def trace_context(
        self,
        trace_id: str | None = None,
        **kwargs,
    ) -> Iterator[str]:
        """
        Context manager for trace correlation.

        The context is scoped to the calling thread or task.

        Args:
            trace_id: Trace ID (auto-generated if not provided)
            **kwargs: Additional context fields

        Yields:
            The trace ID
        """
        trace_id = trace_id or generate_trace_id()
        token = _log_context.set(self.context.with_update(trace_id=trace_id, **kwargs))
        try:
            yield trace_id
        finally:
            _log_context.reset(token)

    def _log(
        self,
        level: int,
        message: str,
        event_type: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return

        record_data = {
            "message": message,
            **self.context.to_dict(),
        }

        if event_type:
            record_data["event_type"] = event_type

        if data:
            record_data.update(data)

        if self.json_output:
            self._logger.log(level, json.dumps(record_data, default=str))
        else:
            extras = " ".join(f"{k}={v}" for k, v in record_data.items() if k != "message")
            self._logger.log(level, f"{message} {extras}".rstrip())

    def log_parameters(self, parameters: dict[str, Any], dropped: list[str] | None = None) -> None:
        """Log the outbound key set of a prepared request."""
        data: dict[str, Any] = {"keys": sorted(parameters)}
        if dropped:
            data["dropped"] = dropped
        self._log(
            logging.DEBUG,
            f"Prepared {len(parameters)} parameters",
            event_type="parameters",
            data=data,
        )

    def log_records(self, count: int) -> None:
        """Log the number of records decoded from a response."""
        self._log(logging.DEBUG, f"Decoded {count} records", event_type="records", data={"count": count})


# =============================================================================
# Formatters
# =============================================================================


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        # Parse JSON message if present
        try:
            message_data = json.loads(record.getMessage())
            if isinstance(message_data, dict):
                log_data.update(message_data)
            else:
                log_data["message"] = record.getMessage()
        except (json.JSONDecodeError, TypeError):
            log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:8} {record.getMessage()}"
        if self.include_timestamp:
            timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3]
            line = f"{timestamp} {line}"
        return line


# =============================================================================
# Utilities
# =============================================================================


def generate_trace_id() -> str:
    """Generate a unique trace ID."""
    return f"trace_{uuid.uuid4().hex[:16]}"


def get_logger(config: LoggingConfig | None = None) -> StructuredLogger:
    """Structured logger for the package, leveled from ``config``."""
    return StructuredLogger.from_config(config or LoggingConfig())


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    *,
    config: LoggingConfig | None = None,
    stream: IO[str] | None = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Configure the package logger and attach an output handler."""
    if config is not None:
        logger = StructuredLogger.from_config(config)
    else:
        logger = StructuredLogger(level=level, json_output=json_output, **kwargs)
    logger.attach_handler(stream)
    return logger


__all__ = [
    "LogContext",
    "StructuredLogger",
    "JSONFormatter",
    "TextFormatter",
    "generate_trace_id",
    "get_logger",
    "configure_logging",
]
