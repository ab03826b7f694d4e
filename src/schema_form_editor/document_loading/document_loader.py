"""Loads saved documents and checks them against their schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError as JsonSchemaDefinitionError

from schema_form_editor.document_editing import ABSENT, synthesize_default
from schema_form_editor.schema_management import SchemaDocument, SchemaError

from .load_states import DocumentState, LoadedDocument

_LOGGER = logging.getLogger(__name__)
_MAX_REPORTED_ISSUES = 3


def validate_document(schema_document: SchemaDocument, document: Any) -> list[str]:
    """Return validation messages for ``document``; an empty list means valid."""
    try:
        Draft202012Validator.check_schema(schema_document.root)
    except JsonSchemaDefinitionError as exc:
        raise SchemaError(f"Invalid schema definition: {exc.message}") from exc

    validator = Draft202012Validator(schema_document.root)
    errors = sorted(validator.iter_errors(document), key=lambda error: error.json_path)
    return [f"{error.json_path}: {error.message}" for error in errors]


def default_document(schema_document: SchemaDocument) -> Any:
    """Return the synthesized default root document."""
    value = synthesize_default(schema_document.node)
    return None if value is ABSENT else value


def load_document(schema_document: SchemaDocument, raw_text: str | None) -> LoadedDocument:
    """Parse and check saved document text.

    Missing or blank text starts an editable default document. Text that does
    not parse or does not validate is replaced by the default document and
    reported through ``LoadedDocument.warnings``.
    """
    defaults = default_document(schema_document)
    if raw_text is None or not raw_text.strip():
        return LoadedDocument(state=DocumentState.EDITABLE, document=defaults)

    _LOGGER.debug("Document state: %s", DocumentState.RAW.value)
    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        return _defaulted(defaults, f"Saved document could not be parsed: {exc}")

    issues = validate_document(schema_document, parsed)
    if issues:
        return _defaulted(
            defaults,
            "Saved document does not match the schema; starting from defaults.",
            *issues[:_MAX_REPORTED_ISSUES],
        )

    _LOGGER.debug("Document state: %s", DocumentState.VALID.value)
    if isinstance(parsed, Mapping) and isinstance(defaults, Mapping):
        parsed = {**defaults, **parsed}
    return LoadedDocument(state=DocumentState.EDITABLE, document=parsed)


def _defaulted(defaults: Any, *warnings: str) -> LoadedDocument:
    _LOGGER.debug("Document state: %s", DocumentState.INVALID.value)
    for warning in warnings:
        _LOGGER.info("Falling back to defaults: %s", warning)
    return LoadedDocument(state=DocumentState.DEFAULTED, document=defaults, warnings=warnings)
