"""
Validation utilities for portal and script descriptors.

Uses jsonschema so a malformed descriptor fails with a message naming the
offending field instead of surfacing later as a KeyError deep in a merge.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

import jsonschema
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from .errors import ErrorContext, InvalidDescriptorError, MissingFieldError

logger = logging.getLogger(__name__)

DescriptorKind = Literal["portal", "script"]

PORTAL_DESCRIPTOR_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "limit": {"type": ["integer", "number", "string"]},
        "offset": {"type": ["integer", "number", "string"]},
    },
    "required": ["name"],
}

SCRIPT_DESCRIPTOR_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "phase": {"type": ["string", "null"]},
    },
    "required": ["name"],
}

_SCHEMAS: dict[str, dict[str, Any]] = {
    "portal": PORTAL_DESCRIPTOR_SCHEMA,
    "script": SCRIPT_DESCRIPTOR_SCHEMA,
}


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def error(cls, error: str, *, missing: list[str] | None = None) -> ValidationResult:
        return cls(valid=False, errors=[error], missing=missing or [])

    def __bool__(self) -> bool:
        return self.valid


def validate_descriptor(descriptor: Any, kind: DescriptorKind) -> ValidationResult:
    """Validate a single portal or script descriptor."""
    if not isinstance(descriptor, Mapping):
        return ValidationResult.error(f"{kind} descriptor must be a mapping, got {type(descriptor).__name__}")

    try:
        jsonschema.validate(instance=dict(descriptor), schema=_SCHEMAS[kind])
    except JsonSchemaValidationError as e:
        if e.validator == "required":
            missing = [name for name in e.validator_value if name not in descriptor]
            return ValidationResult.error(f"{kind} descriptor: {e.message}", missing=missing)
        path = ".".join(str(p) for p in e.path)
        if path:
            return ValidationResult.error(f"{kind} descriptor invalid at '{path}': {e.message}")
        return ValidationResult.error(f"{kind} descriptor invalid: {e.message}")

    return ValidationResult.ok()


def require_descriptor(descriptor: Any, kind: DescriptorKind, *, index: int | None = None) -> Mapping[str, Any]:
    """
    Return ``descriptor`` if valid, otherwise raise the matching input error.

    Raises:
        MissingFieldError: a required key such as ``name`` is absent.
        InvalidDescriptorError: the descriptor is not a mapping or has a
            mistyped field.
    """
    result = validate_descriptor(descriptor, kind)
    if result:
        return descriptor

    context = ErrorContext(index=index, extra={"descriptor": kind})
    logger.debug("Rejected %s descriptor at index %s: %s", kind, index, result.errors)
    if result.missing:
        raise MissingFieldError(field_name=f"{kind}s[{index}].{result.missing[0]}", context=context)
    raise InvalidDescriptorError("; ".join(result.errors), context=context)


__all__ = [
    "PORTAL_DESCRIPTOR_SCHEMA",
    "SCRIPT_DESCRIPTOR_SCHEMA",
    "ValidationResult",
    "validate_descriptor",
    "require_descriptor",
]
