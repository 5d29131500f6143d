"""
Tests for the error taxonomy.
"""

from dapi_shapes.errors import (
    ConfigError,
    DapiResponseError,
    DapiShapesError,
    ErrorCode,
    ErrorContext,
    InputError,
    InvalidConfigError,
    InvalidDescriptorError,
    InvalidRecordError,
    MissingFieldError,
    UnknownOperationError,
)


class TestErrorCodes:
    """Test error code enumeration."""

    def test_error_codes_are_strings(self):
        assert ErrorCode.MISSING_FIELD.value.startswith("ERR_")

    def test_error_codes_unique(self):
        values = [e.value for e in ErrorCode]
        assert len(values) == len(set(values))


class TestHierarchy:
    """Test exception inheritance."""

    def test_input_errors(self):
        for cls in (MissingFieldError, InvalidDescriptorError, InvalidRecordError, UnknownOperationError):
            assert issubclass(cls, InputError)
            assert issubclass(cls, DapiShapesError)

    def test_config_errors(self):
        assert issubclass(InvalidConfigError, ConfigError)


class TestMessages:
    """Test messages and serialization."""

    def test_missing_field_message(self):
        error = MissingFieldError(field_name="fieldData")

        assert error.field_name == "fieldData"
        assert str(error) == "[ERR_1001] Missing required field: fieldData"

    def test_operation_in_str(self):
        error = UnknownOperationError(operation="explode", context=ErrorContext(operation="explode"))

        assert "Unknown operation: explode" in str(error)
        assert "(operation=explode)" in str(error)

    def test_to_dict(self):
        cause = KeyError("x")
        error = DapiResponseError("Invalid token", dapi_code="952", cause=cause)

        d = error.to_dict()

        assert d["error_type"] == "DapiResponseError"
        assert d["code"] == ErrorCode.RESPONSE_ERROR.value
        assert d["dapi_code"] == "952"
        assert d["cause"] == str(cause)
        assert d["context"]["operation"] is None
