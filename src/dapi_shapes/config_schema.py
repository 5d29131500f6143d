"""
JSON schemas for configuration validation.
"""

LOGGING_SCHEMA = {
    "type": "object",
    "properties": {
        "level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
        "format": {"type": "string", "enum": ["text", "json"]},
        "include_timestamp": {"type": "boolean"},
    },
}

PARAMETERS_SCHEMA = {
    "type": "object",
    "properties": {
        "allow_lists": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
        },
        "log_dropped_keys": {"type": "boolean"},
    },
}

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "logging": LOGGING_SCHEMA,
        "parameters": PARAMETERS_SCHEMA,
    },
}
