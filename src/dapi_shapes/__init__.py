"""
Top-level package for dapi-shapes.

Translates between application query/record objects and the flat,
string-valued parameter convention of the FileMaker Data API.
"""

from .allowlist import AllowList, Exact, PrefixWildcard, compile_allow_list
from .errors import (
    DapiResponseError,
    DapiShapesError,
    InvalidDescriptorError,
    InvalidRecordError,
    MissingFieldError,
    UnknownOperationError,
    UnserializableValueError,
)
from .parameters import (
    convert_parameters,
    convert_portals,
    convert_scripts,
    namespace,
    sanitize_parameters,
    stringify,
)
from .pipeline import prepare_parameters, prepare_record, read_records
from .records import field_data, omit, record_id, to_array
from .response import check_messages, filter_response, is_json

__version__ = "1.5.0"

__all__ = [
    "to_array",
    "is_json",
    "namespace",
    "stringify",
    "convert_scripts",
    "convert_portals",
    "convert_parameters",
    "sanitize_parameters",
    "filter_response",
    "check_messages",
    "field_data",
    "record_id",
    "omit",
    "prepare_parameters",
    "prepare_record",
    "read_records",
    "AllowList",
    "Exact",
    "PrefixWildcard",
    "compile_allow_list",
    "DapiShapesError",
    "MissingFieldError",
    "InvalidDescriptorError",
    "InvalidRecordError",
    "UnknownOperationError",
    "UnserializableValueError",
    "DapiResponseError",
]
