"""
Tests for response decoding.
"""

import json

import pytest

from dapi_shapes.errors import DapiResponseError, ErrorCode, MissingFieldError
from dapi_shapes.response import check_messages, filter_response, is_json


class TestIsJson:
    """Test the JSON probe."""

    @pytest.mark.parametrize("value", ['{"a":1}', "[1,2]", "1", "true", "null", '"quoted"', b"[]"])
    def test_valid_json_strings(self, value):
        assert is_json(value)

    @pytest.mark.parametrize("value", ["", "abc", "{a:1}", "NaN", "1.2.3", "[1,"])
    def test_invalid_json_strings(self, value):
        assert not is_json(value)

    def test_scalars_count_as_json(self):
        assert is_json(5)
        assert is_json(1.5)
        assert is_json(True)
        assert is_json(None)

    def test_objects_do_not(self):
        assert not is_json({"a": 1})
        assert not is_json([1])
        assert not is_json(object())


class TestFilterResponse:
    """Test envelope unwrapping and nested JSON decoding."""

    def test_decodes_json_values(self):
        result = filter_response({"response": {"a": "1", "b": json.dumps({"x": 1})}})

        assert result == {"a": 1, "b": {"x": 1}}

    def test_numeric_strings_become_numbers(self):
        """Numeric strings are valid JSON and are decoded."""
        assert filter_response({"response": {"scriptError": "0"}}) == {"scriptError": 0}

    def test_non_json_strings_kept(self):
        result = filter_response({"response": {"modId": "12a", "note": "hello"}})

        assert result == {"modId": "12a", "note": "hello"}

    def test_non_string_values_kept(self):
        data = [{"fieldData": {}, "recordId": "1", "modId": "0"}]

        result = filter_response({"response": {"data": data, "count": 3}})

        assert result["data"] is data
        assert result["count"] == 3

    def test_envelope_discarded(self, envelope_factory):
        result = filter_response(envelope_factory({"token": "abc"}))

        assert result == {"token": "abc"}

    def test_missing_response(self):
        with pytest.raises(MissingFieldError, match="response"):
            filter_response({"messages": []})


class TestCheckMessages:
    """Test message code checking."""

    def test_success(self, envelope_factory):
        check_messages(envelope_factory({}))

    def test_integer_zero_is_success(self):
        check_messages({"messages": [{"code": 0, "message": "OK"}]})

    def test_no_messages(self):
        check_messages({"response": {}})

    def test_error_code(self, envelope_factory):
        envelope = envelope_factory({}, code="401", message="No records match the request")

        with pytest.raises(DapiResponseError) as exc_info:
            check_messages(envelope, operation="find")

        error = exc_info.value
        assert error.dapi_code == "401"
        assert error.code == ErrorCode.RESPONSE_ERROR
        assert error.context.operation == "find"
        assert "No records match" in str(error)
