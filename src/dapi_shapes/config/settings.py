"""
Settings master configuration and global helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import jsonschema
from dotenv import find_dotenv, load_dotenv

from ..config_schema import CONFIG_SCHEMA
from ..errors import InvalidConfigError
from .logging import LoggingConfig
from .parameters import ParameterConfig


@dataclass
class Settings:
    """
    Master configuration for dapi-shapes.

    Aggregates all configuration sections into a single object that can be
    loaded from environment variables, files, or constructed programmatically.
    """

    # Logging configuration
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Outbound parameter allow-lists
    parameters: ParameterConfig = field(default_factory=ParameterConfig)

    @classmethod
    def from_env(cls, prefix: str = "DAPI_") -> Settings:
        """
        Load settings from environment variables.

        Example:
            DAPI_LOG_LEVEL=DEBUG
            DAPI_LOG_FORMAT=json
            DAPI_LOG_DROPPED_KEYS=false
        """
        settings = cls()

        # Logging settings
        if level := os.getenv(f"{prefix}LOG_LEVEL"):
            settings.logging = replace(settings.logging, level=level.upper())
        if log_format := os.getenv(f"{prefix}LOG_FORMAT"):
            settings.logging = replace(settings.logging, format=log_format.lower())

        # Parameter settings
        if dropped := os.getenv(f"{prefix}LOG_DROPPED_KEYS"):
            settings.parameters.log_dropped_keys = dropped.lower() == "true"

        return settings

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        """
        Load settings from a YAML or TOML file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .toml)

        Returns:
            Settings object with values from file
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            import yaml

            with open(path) as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            import tomllib

            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            raise InvalidConfigError(f"Unsupported config file format: {suffix}")

        return cls._from_dict(data)

    @classmethod
    def default(cls) -> Settings:
        """Create default configuration."""
        return cls()

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> Settings:
        """
        Create Settings from a dictionary.

        The dictionary is validated against the configuration schema first.
        Allow-lists given in the file replace the built-in list for that
        operation and leave the others untouched.
        """
        try:
            jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            raise InvalidConfigError(f"Configuration validation failed: {e.message}", cause=e) from e

        settings = cls()

        if "logging" in data:
            values = {k: v for k, v in data["logging"].items() if hasattr(settings.logging, k)}
            settings.logging = LoggingConfig(**values)

        if "parameters" in data:
            section = data["parameters"]
            settings.parameters.allow_lists.update(section.get("allow_lists", {}))
            if "log_dropped_keys" in section:
                settings.parameters.log_dropped_keys = section["log_dropped_keys"]

        return settings

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        import dataclasses

        return dataclasses.asdict(self)


# =============================================================================
# Global Settings & Helpers
# =============================================================================

_global_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, creating with defaults if needed."""
    global _global_settings
    if _global_settings is None:
        _global_settings = Settings.from_env()
    return _global_settings


def configure(settings: Settings | None = None, **kwargs) -> Settings:
    """
    Configure global settings.

    Args:
        settings: Settings object to use globally
        **kwargs: Override specific settings sections

    Returns:
        The configured Settings object
    """
    global _global_settings

    if settings is not None:
        _global_settings = settings
    elif _global_settings is None:
        _global_settings = Settings.from_env()

    for key, value in kwargs.items():
        if hasattr(_global_settings, key):
            setattr(_global_settings, key, value)

    return _global_settings


def load_env(path: str | None = None, *, override: bool = False) -> bool:
    """
    Load environment variables from a .env file.

    Args:
        path: Optional path to a .env file. If not provided, uses find_dotenv().
        override: Whether to override existing environment variables.

    Returns:
        True if a .env file was found and loaded, False otherwise.
    """
    env_path = path or find_dotenv(usecwd=True)
    if not env_path:
        return False
    return load_dotenv(env_path, override=override)


__all__ = ["Settings", "get_settings", "configure", "load_env"]
