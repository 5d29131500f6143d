"""
Error taxonomy for dapi-shapes.

This module provides a hierarchical exception system with:
- Error codes for programmatic handling
- Structured context for debugging
- Attributable input errors (missing fields, malformed descriptors)
- Mapping of Data API message codes to exceptions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for the translation core."""

    # Input errors (1xxx)
    INPUT_ERROR = "ERR_1000"
    MISSING_FIELD = "ERR_1001"
    INVALID_DESCRIPTOR = "ERR_1002"
    INVALID_RECORD = "ERR_1003"
    UNKNOWN_OPERATION = "ERR_1004"
    UNSERIALIZABLE_VALUE = "ERR_1005"

    # Response errors (2xxx)
    RESPONSE_ERROR = "ERR_2000"

    # Configuration errors (6xxx)
    CONFIG_ERROR = "ERR_6000"
    INVALID_CONFIG = "ERR_6002"

    # Internal errors (9xxx)
    INTERNAL_ERROR = "ERR_9000"


@dataclass
class ErrorContext:
    """Structured context for error debugging."""

    operation: str | None = None
    index: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "index": self.index,
            **self.extra,
        }


class DapiShapesError(Exception):
    """
    Base exception for all translation errors.

    Attributes:
        code: Standardized error code for programmatic handling
        message: Human-readable error message
        context: Structured debugging context
        cause: Original exception that caused this error
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context = context or ErrorContext()
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.value}] {self.message}"]
        if self.context.operation:
            parts.append(f"(operation={self.context.operation})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


# =============================================================================
# Input Errors
# =============================================================================


class InputError(DapiShapesError):
    """Base class for malformed caller input."""

    code = ErrorCode.INPUT_ERROR


class MissingFieldError(InputError):
    """A field the translation dereferences is absent."""

    code = ErrorCode.MISSING_FIELD

    def __init__(
        self,
        message: str = "Missing required field",
        *,
        field_name: str | None = None,
        **kwargs,
    ):
        if field_name:
            message = f"Missing required field: {field_name}"
        super().__init__(message, **kwargs)
        self.field_name = field_name


class InvalidDescriptorError(InputError):
    """A portal or script descriptor is malformed."""

    code = ErrorCode.INVALID_DESCRIPTOR


class InvalidRecordError(InputError):
    """A record argument is neither a mapping nor a sequence of mappings."""

    code = ErrorCode.INVALID_RECORD


class UnknownOperationError(InputError):
    """No allow-list is registered for the requested operation."""

    code = ErrorCode.UNKNOWN_OPERATION

    def __init__(
        self,
        message: str = "Unknown operation",
        *,
        operation: str | None = None,
        **kwargs,
    ):
        if operation:
            message = f"Unknown operation: {operation}"
        super().__init__(message, **kwargs)
        self.operation = operation


class UnserializableValueError(InputError):
    """A value cannot be rendered as JSON for the wire."""

    code = ErrorCode.UNSERIALIZABLE_VALUE


# =============================================================================
# Response Errors
# =============================================================================


class DapiResponseError(DapiShapesError):
    """The Data API reported a non-zero message code."""

    code = ErrorCode.RESPONSE_ERROR

    def __init__(
        self,
        message: str = "Data API reported an error",
        *,
        dapi_code: str | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.dapi_code = dapi_code

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["dapi_code"] = self.dapi_code
        return d


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(DapiShapesError):
    """Base class for configuration errors."""

    code = ErrorCode.CONFIG_ERROR


class InvalidConfigError(ConfigError):
    """Configuration is invalid."""

    code = ErrorCode.INVALID_CONFIG


__all__ = [
    # Base
    "ErrorCode",
    "ErrorContext",
    "DapiShapesError",
    # Input errors
    "InputError",
    "MissingFieldError",
    "InvalidDescriptorError",
    "InvalidRecordError",
    "UnknownOperationError",
    "UnserializableValueError",
    # Response errors
    "DapiResponseError",
    # Config errors
    "ConfigError",
    "InvalidConfigError",
]
