"""
Shared test fixtures for dapi-shapes tests.

This module provides:
- Sample Data API records and response envelopes
- Sample query objects with portals and scripts
- Isolation of the global settings between tests
"""

from __future__ import annotations

from typing import Any

import pytest

from dapi_shapes.config import settings as settings_module
from dapi_shapes.serialization import json_dumps

# =============================================================================
# Record Factories
# =============================================================================


def make_record(
    fields: dict[str, Any] | None = None,
    record_id: str | int = "1",
    mod_id: str | int = "0",
    portal_data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create a record in the shape the Data API returns."""
    record: dict[str, Any] = {
        "fieldData": fields if fields is not None else {"name": "Luke Skywalker"},
        "recordId": record_id,
        "modId": mod_id,
    }
    if portal_data is not None:
        record["portalData"] = portal_data
    return record


def make_envelope(response: dict[str, Any], code: str = "0", message: str = "OK") -> dict[str, Any]:
    """Wrap ``response`` in a Data API envelope."""
    return {"response": response, "messages": [{"code": code, "message": message}]}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def records() -> list[dict[str, Any]]:
    return [
        make_record({"name": "Luke Skywalker", "age": 19}, record_id="1", mod_id="3"),
        make_record({"name": "Leia Organa", "age": 19}, record_id="2", mod_id="0"),
    ]


@pytest.fixture
def find_envelope(records) -> dict[str, Any]:
    return make_envelope(
        {
            "data": records,
            "dataInfo": {"foundCount": 2, "returnedCount": 2},
            "scriptResult": json_dumps({"status": "ok"}),
            "scriptError": "0",
        }
    )


@pytest.fixture
def query() -> dict[str, Any]:
    return {
        "limit": 10,
        "offset": 2,
        "sort": [{"fieldName": "name", "sortOrder": "ascend"}],
        "portals": [{"name": "Planets", "limit": 5}, {"name": "Vehicles", "offset": 1}],
        "scripts": [
            {"name": "Log Query", "param": {"source": "tests"}},
            {"name": "Prepare", "phase": "prerequest", "param": 7},
        ],
    }


@pytest.fixture(autouse=True)
def reset_global_settings(monkeypatch):
    """Each test starts without configured global settings."""
    monkeypatch.setattr(settings_module, "_global_settings", None)
    yield


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def envelope_factory():
    return make_envelope
