"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, load_configured_schema
from .runtime_settings import DocumentConfig, EditingSettings, EditorConfiguration, SchemaConfig

__all__ = [
    "DocumentConfig",
    "EditingSettings",
    "EditorConfiguration",
    "SchemaConfig",
    "ConfigurationError",
    "load_configuration",
    "load_configured_schema",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
