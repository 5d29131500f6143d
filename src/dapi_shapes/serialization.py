"""
Compact JSON helpers for wire values.

Uses orjson, whose output matches the compact form the Data API expects
(no whitespace between tokens, non-ASCII characters kept verbatim).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import orjson

from .errors import UnserializableValueError

JSONDecodeError = orjson.JSONDecodeError

_DUMPS_OPTIONS = orjson.OPT_NON_STR_KEYS


def _default(obj: Any) -> Any:
    # orjson only knows the builtin containers
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def json_dumps(obj: Any) -> str:
    """
    Serialize ``obj`` to a compact JSON string.

    Raises:
        UnserializableValueError: if ``obj`` holds a value JSON cannot carry,
            such as an integer outside the 64-bit range.
    """
    try:
        return orjson.dumps(obj, default=_default, option=_DUMPS_OPTIONS).decode("utf-8")
    except orjson.JSONEncodeError as e:
        raise UnserializableValueError(f"Cannot encode value as JSON: {e}", cause=e) from e


def json_loads(data: bytes | bytearray | str) -> Any:
    """
    Parse JSON text.

    Raises:
        JSONDecodeError: if ``data`` is not valid JSON.
    """
    return orjson.loads(data)


__all__ = ["JSONDecodeError", "json_dumps", "json_loads"]
