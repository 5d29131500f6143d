"""
Tests for operation-level helpers.
"""

import logging

import pytest

from dapi_shapes.config import LoggingConfig, ParameterConfig, Settings
from dapi_shapes.errors import DapiResponseError, MissingFieldError, UnknownOperationError
from dapi_shapes.pipeline import prepare_parameters, prepare_record, read_records


class TestPrepareParameters:
    """Test outbound shaping per operation."""

    def test_list_is_namespaced_and_stringified(self, query):
        result = prepare_parameters("list", query)

        assert result == {
            "portals": '["Planets","Vehicles"]',
            "script": "Log Query",
            "script.param": '{"source":"tests"}',
            "script.prerequest": "Prepare",
            "script.prerequest.param": "7",
            "_limit": "10",
            "_offset": "2",
            "_sort": '[{"fieldName":"name","sortOrder":"ascend"}]',
            "_limit.Planets": "5",
            "_offset.Vehicles": "1",
        }

    def test_list_keeps_portal_paging(self):
        """Portal limit and offset reach the query string under the ``_`` prefix."""
        result = prepare_parameters("list", {"portals": [{"name": "Orders", "limit": 5, "offset": 2}]})

        assert result == {"portals": '["Orders"]', "_limit.Orders": "5", "_offset.Orders": "2"}

    def test_get_caller_paging_key_wins(self):
        result = prepare_parameters("get", {"portals": [{"name": "Orders", "limit": 5}], "_limit.Orders": 9})

        assert result["_limit.Orders"] == "9"

    def test_find_keeps_body_values(self, query):
        result = prepare_parameters("find", {**query, "query": [{"name": "Luke"}]})

        assert result["query"] == [{"name": "Luke"}]
        assert result["limit"] == "10"
        assert result["limit.Planets"] == "5"
        assert result["offset.Vehicles"] == "1"
        assert result["portals"] == ["Planets", "Vehicles"]
        assert "scripts" not in result

    def test_disallowed_keys_dropped(self):
        result = prepare_parameters("delete", {"merge": True, "scripts": [{"name": "Cleanup"}]})

        assert result == {"script": "Cleanup"}

    def test_unknown_operation(self):
        with pytest.raises(UnknownOperationError, match="explode"):
            prepare_parameters("explode", {})

    def test_configured_allow_list(self):
        settings = Settings(parameters=ParameterConfig(allow_lists={"find": ["query"]}))

        result = prepare_parameters("find", {"query": [], "limit": 1}, settings=settings)

        assert result == {"query": []}

    def test_logs_dropped_keys(self, caplog):
        settings = Settings(logging=LoggingConfig(level="DEBUG"))

        with caplog.at_level(logging.DEBUG):
            prepare_parameters("delete", {"merge": True}, settings=settings)

        assert any("merge" in record.getMessage() for record in caplog.records)

    def test_env_log_level_enables_parameter_log(self, caplog, monkeypatch):
        monkeypatch.setenv("DAPI_LOG_LEVEL", "DEBUG")

        with caplog.at_level(logging.DEBUG):
            prepare_parameters("delete", {"merge": True})

        assert any(record.getMessage().startswith("Prepared") for record in caplog.records)

    def test_default_level_skips_parameter_log(self, caplog, monkeypatch):
        monkeypatch.delenv("DAPI_LOG_LEVEL", raising=False)

        with caplog.at_level(logging.DEBUG):
            prepare_parameters("delete", {"merge": True})

        assert not any(record.getMessage().startswith("Prepared") for record in caplog.records)

    def test_installs_no_handler(self):
        package_logger = logging.getLogger("dapi_shapes")
        before = list(package_logger.handlers)

        prepare_parameters("list", {"limit": 1})
        read_records({"messages": [{"code": "0"}], "response": {"data": []}})

        assert package_logger.handlers == before


class TestPrepareRecord:
    """Test create/edit bodies."""

    def test_create_body(self):
        result = prepare_record(
            "create",
            {"name": "Luke", "age": 19, "tags": ["jedi"]},
            {"scripts": [{"name": "Notify", "param": "new"}], "merge": False},
        )

        assert result == {
            "fieldData": {"name": "Luke", "age": "19", "tags": '["jedi"]'},
            "script": "Notify",
            "script.param": "new",
        }

    def test_edit_keeps_mod_id(self):
        result = prepare_record("edit", {"name": "Luke"}, {"modId": 3})

        assert result == {"fieldData": {"name": "Luke"}, "modId": "3"}


class TestReadRecords:
    """Test inbound decoding."""

    def test_flattens_records(self, find_envelope):
        records = read_records(find_envelope)

        assert records == [
            {"name": "Luke Skywalker", "age": 19, "recordId": "1", "modId": "3"},
            {"name": "Leia Organa", "age": 19, "recordId": "2", "modId": "0"},
        ]

    def test_error_envelope(self, envelope_factory):
        with pytest.raises(DapiResponseError):
            read_records(envelope_factory({}, code="952", message="Invalid token"))

    def test_missing_data(self, envelope_factory):
        with pytest.raises(MissingFieldError, match="response.data"):
            read_records(envelope_factory({"dataInfo": {}}))
