"""
Operation-level translation helpers.

Wires the parameter and response modules together the way a Data API
client uses them: one call to shape an outbound request for a given
operation, one call to turn a response envelope into flat records.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .allowlist import NAMESPACED_OPERATIONS, AllowList
from .config import Settings, get_settings
from .errors import ErrorContext, MissingFieldError, UnknownOperationError
from .logging import get_logger
from .parameters import (
    convert_parameters,
    convert_portals,
    namespace,
    namespace_portals,
    sanitize_parameters,
    stringify,
)
from .records import field_data
from .response import check_messages, filter_response


def _allow_list(operation: str, settings: Settings) -> AllowList:
    allow_list = settings.parameters.allow_list(operation)
    if allow_list is None:
        raise UnknownOperationError(operation=operation)
    return allow_list


def _sanitize(operation: str, body: Mapping[str, Any], settings: Settings) -> dict[str, Any]:
    allow_list = _allow_list(operation, settings)
    sanitized = sanitize_parameters(body, allow_list)
    # the wire carries portal names, not the caller's descriptors
    if "portals" in sanitized and body.get("portals") is sanitized["portals"]:
        sanitized["portals"] = convert_portals(body)["portals"]

    logger = get_logger(settings.logging)
    with logger.trace_context(operation=operation):
        dropped = None
        if settings.parameters.log_dropped_keys:
            dropped = [k for k in convert_parameters(body) if k not in sanitized]
        logger.log_parameters(sanitized, dropped=dropped)
    return sanitized


def prepare_parameters(
    operation: str,
    parameters: Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Shape query parameters for ``operation``.

    ``list`` and ``get`` send their parameters as a query string, so their
    control keys and portal paging keys are namespaced first and every
    value is rendered as a string. Other operations keep composite values
    for the JSON body.

    Raises:
        UnknownOperationError: no allow-list is configured for ``operation``.
    """
    settings = settings or get_settings()
    body = dict(parameters or {})
    if operation not in NAMESPACED_OPERATIONS:
        return _sanitize(operation, body, settings)
    return stringify(_sanitize(operation, namespace_portals(namespace(body)), settings))


def prepare_record(
    operation: str,
    field_values: Mapping[str, Any],
    parameters: Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Build a ``create`` or ``edit`` body.

    ``field_values`` are stringified into ``fieldData``; ``parameters``
    may carry scripts, ``portalData`` or ``modId`` and override
    ``fieldData`` if they supply it.
    """
    settings = settings or get_settings()
    body = {"fieldData": stringify(field_values), **(parameters or {})}
    return _sanitize(operation, body, settings)


def read_records(
    envelope: Mapping[str, Any],
    *,
    operation: str | None = None,
    settings: Settings | None = None,
) -> list[dict[str, Any]]:
    """
    Decode a response envelope into flat records.

    Raises:
        DapiResponseError: the envelope reports a non-zero message code.
        MissingFieldError: the response carries no ``data``.
    """
    check_messages(envelope, operation=operation)
    response = filter_response(envelope)
    if "data" not in response:
        raise MissingFieldError(field_name="response.data", context=ErrorContext(operation=operation))

    records = field_data(list(response["data"]))
    get_logger((settings or get_settings()).logging).log_records(len(records))
    return records


__all__ = ["prepare_parameters", "prepare_record", "read_records"]
