"""
Outbound parameter configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..allowlist import DEFAULT_ALLOW_LISTS, AllowList, compile_allow_list


def _default_allow_lists() -> dict[str, list[str]]:
    return {operation: list(entries) for operation, entries in DEFAULT_ALLOW_LISTS.items()}


@dataclass
class ParameterConfig:
    """Allow-lists per Data API operation."""

    allow_lists: dict[str, list[str]] = field(default_factory=_default_allow_lists)
    log_dropped_keys: bool = True

    def __post_init__(self):
        for operation, entries in self.allow_lists.items():
            if isinstance(entries, str) or not all(isinstance(e, str) for e in entries):
                raise ValueError(f"Allow-list for '{operation}' must be a list of strings")

    def allow_list(self, operation: str) -> AllowList | None:
        entries = self.allow_lists.get(operation)
        return compile_allow_list(entries) if entries is not None else None


__all__ = ["ParameterConfig"]
