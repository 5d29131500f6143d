"""
Outbound parameter assembly.

Turns an application query or record object into the flat, string-valued,
dot-separated parameter set the FileMaker Data API accepts:

- control keys ``limit``/``offset``/``sort`` become ``_limit``/``_offset``/``_sort``
- ``portals`` descriptors become ``limit.<portal>``/``offset.<portal>`` keys
  plus a list of portal names
- ``scripts`` descriptors become ``script[.<phase>][.<key>]`` keys
- the result is filtered against an allow-list and numbers are stringified
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from functools import reduce
from typing import Any

from .allowlist import AllowList, compile_allow_list
from .validation import require_descriptor
from .values import NumberValue, classify, to_wire_string

logger = logging.getLogger(__name__)

CONTROL_KEYS = ("limit", "offset", "sort")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def namespace(data: Mapping[str, Any]) -> dict[str, Any]:
    """Rename top-level ``limit``, ``offset`` and ``sort`` to their ``_`` forms."""
    return {(f"_{key}" if key in CONTROL_KEYS else key): value for key, value in data.items()}


def stringify(data: Mapping[str, Any]) -> dict[str, str]:
    """
    Map every value to its wire string.

    Strings pass through, mappings, sequences and ``None`` are JSON-encoded
    (``None`` becomes ``"null"``), and other scalars use their string form.
    """
    return {key: to_wire_string(value) for key, value in data.items()}


# =============================================================================
# Scripts
# =============================================================================


def _flatten_script(script: Mapping[str, Any]) -> dict[str, Any]:
    phase = script.get("phase")
    base = f"script.{phase}" if isinstance(phase, str) and phase else "script"

    flattened: dict[str, Any] = {}
    for key, value in script.items():
        wire_key = base if key == "name" else f"{base}.{key}"
        if ".phase" in wire_key:
            continue
        flattened[wire_key] = value
    return flattened


def convert_scripts(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten ``data["scripts"]`` into Data API script keys.

    A descriptor without a phase maps ``name`` to ``script`` and every other
    key ``k`` to ``script.k``; with a phase ``p`` the keys become
    ``script.p`` and ``script.p.k``. Later descriptors overwrite earlier
    ones on key collisions.

    Returns an empty dict when ``scripts`` is absent or not a sequence.
    """
    scripts = data.get("scripts")
    if not _is_sequence(scripts):
        return {}

    merged: dict[str, Any] = {}
    for index, script in enumerate(scripts):
        merged.update(_flatten_script(require_descriptor(script, "script", index=index)))
    return merged


# =============================================================================
# Portals
# =============================================================================


def _flatten_portal(portal: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    name = portal["name"]
    flattened: dict[str, Any] = {}
    for key, value in portal.items():
        if key == "name":
            continue
        if key in ("limit", "offset"):
            flattened[f"{key}.{name}"] = value
        else:
            flattened[key] = value
    return name, flattened


def _fold_portal(
    acc: tuple[tuple[str, ...], dict[str, Any]],
    indexed: tuple[int, Any],
) -> tuple[tuple[str, ...], dict[str, Any]]:
    names, fields = acc
    index, portal = indexed
    name, flattened = _flatten_portal(require_descriptor(portal, "portal", index=index))
    return (*names, name), {**fields, **flattened}


def fold_portals(portals: Iterable[Any]) -> tuple[tuple[str, ...], dict[str, Any]]:
    """Fold portal descriptors into ``(names, flattened_fields)``."""
    return reduce(_fold_portal, enumerate(portals), ((), {}))


def convert_portals(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten ``data["portals"]`` into Data API portal keys.

    ``limit`` and ``offset`` become ``limit.<name>`` and ``offset.<name>``,
    ``name`` is dropped from the flattened keys and collected into the
    ``portals`` list in declaration order, other keys pass through.
    """
    portals = data.get("portals")
    names, fields = fold_portals(portals if _is_sequence(portals) else ())
    return {"portals": list(names), **fields}


def namespace_portals(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Add ``_limit.<name>``/``_offset.<name>`` keys for portal pagination.

    The query-string operations read portal paging under the ``_`` prefix.
    Keys already present in ``data`` win.
    """
    portals = data.get("portals")
    _, fields = fold_portals(portals if _is_sequence(portals) else ())
    paging = {f"_{key}": value for key, value in fields.items() if key.startswith(("limit.", "offset."))}
    return {**paging, **data}


# =============================================================================
# Assembly & Sanitizing
# =============================================================================


def convert_parameters(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Layer converted portals, stringified scripts and ``data`` itself.

    Later layers win, so keys supplied by the caller always override the
    derived portal and script keys.
    """
    return {**convert_portals(data), **stringify(convert_scripts(data)), **data}


def _stringify_number(value: Any) -> Any:
    wire = classify(value)
    return wire.to_wire() if isinstance(wire, NumberValue) else value


def sanitize_parameters(
    parameters: Mapping[str, Any],
    safe_parameters: Iterable[str] | AllowList | None = None,
) -> dict[str, Any]:
    """
    Assemble ``parameters`` and keep only allow-listed keys.

    Args:
        parameters: Query or record object.
        safe_parameters: Key names and wildcard sentinels (``limit.*``,
            ``offset.*``, ``_limit.*``, ``_offset.*``). ``None`` keeps every key.

    Returns:
        The assembled parameters with numeric values converted to strings.
    """
    converted = convert_parameters(parameters)

    if safe_parameters is not None:
        allow_list = compile_allow_list(safe_parameters)
        retained = allow_list.filter(converted)
        dropped = [k for k in converted if k not in retained]
        if dropped:
            logger.debug("Dropped parameters not in allow-list: %s", dropped)
    else:
        retained = converted

    return {key: _stringify_number(value) for key, value in retained.items()}


__all__ = [
    "CONTROL_KEYS",
    "namespace",
    "namespace_portals",
    "stringify",
    "convert_scripts",
    "convert_portals",
    "fold_portals",
    "convert_parameters",
    "sanitize_parameters",
]
