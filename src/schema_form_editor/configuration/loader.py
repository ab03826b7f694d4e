"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from schema_form_editor.schema_management import SchemaDocument, SchemaError, load_schema_document

from .runtime_settings import DocumentConfig, EditingSettings, EditorConfiguration, SchemaConfig


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> EditorConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    document = _parse_document_section(parsed.get("document"), path.parent)
    editing = _parse_editing_section(parsed.get("editing"))

    return EditorConfiguration(path=path, schema=schema, document=document, editing=editing)


def load_configured_schema(configuration: EditorConfiguration) -> SchemaDocument:
    """Load the schema named by ``configuration``."""
    try:
        return load_schema_document(configuration.schema)
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc


def _parse_schema_section(value: Any, base_path: Path) -> SchemaConfig:
    if isinstance(value, str):
        return _schema_config(value, None)
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return _schema_config(inline, None)
    if path_value:
        schema_path = _resolve_path(base_path, _require_non_empty_string(path_value, "schema.path"))
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        return _schema_config(schema_path.read_text(encoding="utf-8"), schema_path)
    raise ConfigurationError("Schema definition requires either inline or path.")


def _schema_config(text: str, source_path: Path | None) -> SchemaConfig:
    if not text.strip():
        raise ConfigurationError("Schema text cannot be empty.")
    return SchemaConfig(text=text, source_path=source_path)


def _parse_document_section(value: Any, base_path: Path) -> DocumentConfig:
    if value is None:
        return DocumentConfig(path=None)
    section = _require_mapping(value, "document")
    path_value = section.get("path")
    if path_value is None:
        return DocumentConfig(path=None)
    return DocumentConfig(
        path=_resolve_path(base_path, _require_non_empty_string(path_value, "document.path"))
    )


def _parse_editing_section(value: Any) -> EditingSettings:
    if value is None:
        return EditingSettings()
    section = _require_mapping(value, "editing")
    strict = section.get("strict_addresses", False)
    if not isinstance(strict, bool):
        raise ConfigurationError("editing.strict_addresses must be a boolean.")
    return EditingSettings(strict_addresses=strict)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped
