"""
Record helpers.

Pull the flat field payload and record ids out of Data API records, for a
single record or a batch.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .errors import ErrorContext, InvalidRecordError, MissingFieldError


def to_array(data: Any) -> list[Any] | tuple[Any, ...]:
    """Return lists and tuples unchanged, wrap anything else in a list."""
    return data if isinstance(data, (list, tuple)) else [data]


def _is_batch(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray))


def _require(record: Any, key: str, index: int | None = None) -> Any:
    if not isinstance(record, Mapping):
        raise InvalidRecordError(
            f"Record must be a mapping, got {type(record).__name__}",
            context=ErrorContext(index=index),
        )
    if key not in record:
        raise MissingFieldError(field_name=key, context=ErrorContext(index=index))
    return record[key]


def _flatten(record: Any, index: int | None = None) -> dict[str, Any]:
    fields = _require(record, "fieldData", index)
    return {
        **fields,
        "recordId": _require(record, "recordId", index),
        "modId": record.get("modId"),
    }


def field_data(data: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
    """
    Merge ``fieldData`` with ``recordId`` and ``modId``.

    Returns a list for a batch and a dict for a single record. The input is
    never modified.

    Raises:
        MissingFieldError: a record lacks ``fieldData`` or ``recordId``.
        InvalidRecordError: ``data`` is neither a record nor a batch.
    """
    if _is_batch(data):
        return [_flatten(record, index) for index, record in enumerate(data)]
    return _flatten(data)


def record_id(data: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
    """
    Return record ids.

    A batch yields the raw ids with their types preserved; a single record
    yields its id as a string.
    """
    if _is_batch(data):
        return [_require(record, "recordId", index) for index, record in enumerate(data)]
    return str(_require(data, "recordId"))


def omit(data: Any, properties: Iterable[str]) -> Any:
    """
    Drop ``properties`` from a mapping or from every mapping in a list.

    .. deprecated:: 1.5.0
        Build the filtered mapping directly.
    """
    warnings.warn("omit() is deprecated; filter the mapping directly", DeprecationWarning, stacklevel=2)
    dropped = frozenset([properties] if isinstance(properties, str) else properties)
    if _is_batch(data):
        return [{k: v for k, v in obj.items() if k not in dropped} for obj in data]
    return {k: v for k, v in data.items() if k not in dropped}


__all__ = ["to_array", "field_data", "record_id", "omit"]
