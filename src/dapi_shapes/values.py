"""
Tagged wire values.

Every outbound value is resolved once into one of four variants and then
rendered to its wire string. Keeping the dispatch in ``classify`` means the
type coercer and the parameter sanitizer agree on what counts as a number.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from .serialization import json_dumps


@dataclass(frozen=True)
class StringValue:
    value: str

    def to_wire(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: int | float

    def to_wire(self) -> str:
        return _number_text(self.value)


@dataclass(frozen=True)
class CompositeValue:
    """Mappings, sequences and ``None``; rendered as JSON."""

    value: Any

    def to_wire(self) -> str:
        return json_dumps(self.value)


@dataclass(frozen=True)
class ScalarValue:
    """Any other scalar, booleans included."""

    value: Any

    def to_wire(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


WireValue = Union[StringValue, NumberValue, CompositeValue, ScalarValue]


def _number_text(value: int | float) -> str:
    """Render a number the way JavaScript's ``Number#toString`` does."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    mantissa, _, exp = text.partition("e")
    exponent = int(exp)
    # positional notation between 1e-7 and 1e21
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a wire number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify(value: Any) -> WireValue:
    """Resolve a Python value into its wire variant."""
    if isinstance(value, str):
        return StringValue(value)
    if is_number(value):
        return NumberValue(value)
    if value is None or isinstance(value, Mapping) or _is_sequence(value):
        return CompositeValue(value)
    return ScalarValue(value)


def to_wire_string(value: Any) -> str:
    """Render any value as the string the Data API receives."""
    return classify(value).to_wire()


__all__ = [
    "StringValue",
    "NumberValue",
    "CompositeValue",
    "ScalarValue",
    "WireValue",
    "classify",
    "is_number",
    "to_wire_string",
]
