"""
Inbound response decoding.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import DapiResponseError, ErrorContext, MissingFieldError
from .serialization import JSONDecodeError, json_loads
from .values import is_number

logger = logging.getLogger(__name__)

SUCCESS_CODE = "0"


def is_json(value: Any) -> bool:
    """
    Return True if ``value`` parses as JSON.

    Strings and bytes are parsed. Numbers, booleans and ``None`` count as
    JSON since their text form parses back to the same value; mappings,
    sequences and other objects do not. Never raises.
    """
    if isinstance(value, (str, bytes, bytearray)):
        try:
            json_loads(value)
        except JSONDecodeError:
            return False
        return True
    return value is None or isinstance(value, bool) or is_number(value)


def _decode(value: Any) -> Any:
    if isinstance(value, (str, bytes, bytearray)) and is_json(value):
        return json_loads(value)
    return value


def filter_response(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Unwrap the ``response`` of a Data API envelope.

    Every value that is itself a JSON string is replaced with its parsed
    form, so ``"1"`` becomes ``1`` and ``'{"x":1}'`` becomes ``{"x": 1}``;
    anything else is returned unchanged.

    Raises:
        MissingFieldError: the envelope has no ``response``.
    """
    if not isinstance(data, Mapping) or "response" not in data:
        raise MissingFieldError(field_name="response")
    return {key: _decode(value) for key, value in data["response"].items()}


def check_messages(data: Mapping[str, Any], *, operation: str | None = None) -> None:
    """
    Raise if the envelope's ``messages`` report a non-zero code.

    Raises:
        DapiResponseError: first message whose code is not ``"0"``.
    """
    for message in data.get("messages") or ():
        code = str(message.get("code", SUCCESS_CODE))
        if code == SUCCESS_CODE:
            continue
        text = message.get("message") or "Data API reported an error"
        error = DapiResponseError(text, dapi_code=code, context=ErrorContext(operation=operation))
        logger.warning("Data API error %s: %s", code, text)
        raise error


__all__ = ["SUCCESS_CODE", "is_json", "filter_response", "check_messages"]
