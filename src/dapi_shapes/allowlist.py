"""
Allow-list rules for outbound parameters.

A caller-supplied list of key names is compiled once into exact and
prefix-wildcard rules. Only the four pagination sentinels are wildcards;
every other entry, even one ending in ``.*``, names a key exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

WILDCARD_SENTINELS = ("_offset.*", "_limit.*", "offset.*", "limit.*")


@dataclass(frozen=True)
class Exact:
    name: str

    def matches(self, key: str) -> bool:
        return key == self.name


@dataclass(frozen=True)
class PrefixWildcard:
    prefix: str

    def matches(self, key: str) -> bool:
        return key.startswith(self.prefix)


AllowRule = Union[Exact, PrefixWildcard]


def compile_rule(entry: str) -> AllowRule:
    if entry in WILDCARD_SENTINELS:
        return PrefixWildcard(entry[:-1])
    return Exact(entry)


@dataclass(frozen=True)
class AllowList:
    """Compiled allow-list."""

    rules: tuple[AllowRule, ...]

    @property
    def exact_names(self) -> frozenset[str]:
        return frozenset(r.name for r in self.rules if isinstance(r, Exact))

    @property
    def prefixes(self) -> tuple[str, ...]:
        return tuple(r.prefix for r in self.rules if isinstance(r, PrefixWildcard))

    def allows(self, key: str) -> bool:
        if key in self.exact_names:
            return True
        return any(key.startswith(prefix) for prefix in self.prefixes)

    def filter(self, parameters: Mapping[str, Any]) -> dict[str, Any]:
        """Keep the allowed keys of ``parameters`` in their original order."""
        return {k: v for k, v in parameters.items() if self.allows(k)}


def compile_allow_list(entries: Iterable[str] | AllowList) -> AllowList:
    if isinstance(entries, AllowList):
        return entries
    if isinstance(entries, str):
        entries = [entries]
    seen: dict[AllowRule, None] = {}
    for entry in entries:
        seen[compile_rule(entry)] = None
    return AllowList(rules=tuple(seen))


_SCRIPT_KEYS = [
    "script",
    "script.param",
    "script.prerequest",
    "script.prerequest.param",
    "script.presort",
    "script.presort.param",
]

# Allow-lists for each Data API operation. ``list`` and ``get`` travel as a
# query string and are namespaced before filtering.
DEFAULT_ALLOW_LISTS: dict[str, list[str]] = {
    "list": ["_limit", "_offset", "_sort", "portals", *_SCRIPT_KEYS, "layout.response", "_offset.*", "_limit.*"],
    "get": ["portals", *_SCRIPT_KEYS, "layout.response", "_offset.*", "_limit.*"],
    "find": [
        "query",
        "sort",
        "limit",
        "offset",
        "portals",
        *_SCRIPT_KEYS,
        "layout.response",
        "offset.*",
        "limit.*",
    ],
    "create": ["fieldData", "portalData", *_SCRIPT_KEYS],
    "edit": ["fieldData", "portalData", "modId", *_SCRIPT_KEYS],
    "delete": [*_SCRIPT_KEYS],
    "duplicate": [*_SCRIPT_KEYS],
}

NAMESPACED_OPERATIONS = frozenset({"list", "get"})


__all__ = [
    "WILDCARD_SENTINELS",
    "Exact",
    "PrefixWildcard",
    "AllowRule",
    "AllowList",
    "compile_rule",
    "compile_allow_list",
    "DEFAULT_ALLOW_LISTS",
    "NAMESPACED_OPERATIONS",
]
