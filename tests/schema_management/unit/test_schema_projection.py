"""Schema loading and projection tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from schema_form_editor.configuration.runtime_settings import SchemaConfig
from schema_form_editor.schema_management import (
    NO_DEFAULT,
    ArrayShape,
    Deferred,
    NumberLeaf,
    ObjectShape,
    SchemaCycleError,
    SchemaError,
    StringLeaf,
    UnsupportedShape,
    Wrapped,
    load_schema_document,
    node_description,
    resolve_shape,
    resolve_shape_at,
)


def _schema_config(text: str, source_path: Path | None = None) -> SchemaConfig:
    return SchemaConfig(text=text, source_path=source_path)


def _json_config(schema: dict) -> SchemaConfig:
    return _schema_config(json.dumps(schema))


def test_sample_schema_projects_fields_in_declaration_order() -> None:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "compliance-schema.yaml"

    document = load_schema_document(
        _schema_config(sample_path.read_text(encoding="utf-8"), sample_path)
    )
    root = resolve_shape(document.node)

    assert isinstance(root, ObjectShape)
    assert list(root.fields) == [
        "general",
        "lawsAndRegulations",
        "dataPoints",
        "threatsAndVulnerabilities",
    ]
    assert root.description == "Compliance assessment structure for a repository"
    assert document.source_path == sample_path
    assert document.root["$defs"]["Cia"]["type"] == "object"


def test_sample_schema_resolves_mutual_references() -> None:
    sample_path = Path(__file__).resolve().parents[3] / "samples" / "compliance-schema.yaml"
    document = load_schema_document(_schema_config(sample_path.read_text(encoding="utf-8")))

    threats = resolve_shape_at(document.node, ("threatsAndVulnerabilities",))
    assert isinstance(threats, ArrayShape)
    assert isinstance(threats.element, Deferred)

    related = resolve_shape_at(
        document.node,
        ("threatsAndVulnerabilities", 0, "mitigations", 0, "relatedThreats", 0, "description"),
    )
    assert related == StringLeaf(description="Description of the threat or vulnerability")

    rating = resolve_shape_at(document.node, ("dataPoints", 0, "cia", "integrity"))
    assert rating == NumberLeaf(
        minimum=1, maximum=4, description="Integrity rating (1-4)", integer=True
    )


def test_optional_properties_are_wrapped() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["title"],
                "properties": {
                    "title": {"type": "string"},
                    "subtitle": {"type": "string"},
                },
            }
        )
    )
    root = resolve_shape(document.node)

    assert isinstance(root, ObjectShape)
    assert root.fields["title"] == StringLeaf()
    assert root.fields["subtitle"] == Wrapped(inner=StringLeaf())


def test_default_keyword_becomes_wrapped_fallback() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["status"],
                "properties": {
                    "status": {"type": "string", "default": "draft", "description": "Status"},
                },
            }
        )
    )
    status = resolve_shape_at(document.node, ("status",))

    assert isinstance(status, Wrapped)
    assert status.default_value == "draft"
    assert status.inner == StringLeaf(description="Status")


def test_reference_description_is_kept_on_wrapper() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["owner"],
                "properties": {"owner": {"$ref": "#/definitions/Person", "description": "Owner"}},
                "definitions": {"Person": {"type": "string", "description": "Person"}},
            }
        )
    )
    owner = resolve_shape_at(document.node, ("owner",))

    assert isinstance(owner, Wrapped)
    assert owner.default_value is NO_DEFAULT
    assert node_description(owner) == "Owner"
    assert resolve_shape(owner) == StringLeaf(description="Person")


def test_nullable_types_and_unsupported_types() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["note", "flag", "mode"],
                "properties": {
                    "note": {"type": ["string", "null"]},
                    "flag": {"type": "boolean", "description": "Flag"},
                    "mode": {"enum": ["a", "b"]},
                },
            }
        )
    )
    root = resolve_shape(document.node)

    assert isinstance(root, ObjectShape)
    assert root.fields["note"] == StringLeaf()
    assert root.fields["flag"] == UnsupportedShape(type_name="boolean", description="Flag")
    assert root.fields["mode"] == StringLeaf(choices=("a", "b"))


def test_root_reference_supports_recursive_schema() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["label", "children"],
                "properties": {
                    "label": {"type": "string"},
                    "children": {"type": "array", "items": {"$ref": "#"}},
                },
            }
        )
    )

    assert resolve_shape_at(document.node, ("children", 0, "children", 1, "label")) == StringLeaf()


def test_reference_cycle_without_shape_raises_cycle_error() -> None:
    config = _json_config(
        {
            "type": "object",
            "properties": {"loop": {"$ref": "#/$defs/A"}},
            "$defs": {"A": {"$ref": "#/$defs/B"}, "B": {"$ref": "#/$defs/A"}},
        }
    )

    with pytest.raises(SchemaCycleError):
        load_schema_document(config)


@pytest.mark.parametrize(
    ("schema", "message"),
    [
        ({"type": "object", "properties": {"x": {"$ref": "#/$defs/Nope"}}}, "Unresolved"),
        ({"type": "object", "properties": {"x": {"$ref": "other.json"}}}, "Unsupported schema"),
        ({"type": "object", "properties": {"x": {"type": "array"}}}, "requires items"),
        ({"type": "object", "properties": {"x": 5}}, "must be a mapping"),
        ({"type": "number", "minimum": "one"}, "must be a number"),
        ({"type": "object", "properties": []}, "properties as a mapping"),
    ],
)
def test_malformed_schemas_raise_schema_error(schema: dict, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        load_schema_document(_json_config(schema))


def test_invalid_schema_text_raises_schema_error() -> None:
    with pytest.raises(SchemaError):
        load_schema_document(_schema_config("{not: [valid"))


def test_non_mapping_root_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="root must be a mapping"):
        load_schema_document(_schema_config("- just\n- a list\n"))


def test_leaf_constraints_are_projected() -> None:
    document = load_schema_document(
        _json_config(
            {
                "type": "object",
                "required": ["score", "level", "label", "tags", "version"],
                "properties": {
                    "score": {"type": "number", "exclusiveMinimum": 0, "maximum": 10},
                    "level": {"enum": ["low", "high"]},
                    "label": {"type": "string", "minLength": 1},
                    "tags": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                    "version": {"const": 2},
                },
            }
        )
    )
    root = resolve_shape(document.node)

    assert isinstance(root, ObjectShape)
    assert root.fields["score"] == NumberLeaf(maximum=10, exclusive_minimum=0)
    assert root.fields["level"] == StringLeaf(choices=("low", "high"))
    assert root.fields["label"] == StringLeaf(min_length=1)
    assert root.fields["tags"] == ArrayShape(element=StringLeaf(), min_items=1)
    assert root.fields["version"] == NumberLeaf(integer=True, choices=(2,))


@pytest.mark.parametrize(
    ("field_schema", "type_name"),
    [
        ({"type": "string", "pattern": "^[A-Z]+$"}, "pattern"),
        ({"type": "integer", "multipleOf": 5}, "multipleOf"),
        ({"anyOf": [{"type": "string"}, {"type": "number"}]}, "anyOf"),
        (
            {"type": "array", "items": {"type": "string"}, "minItems": 2, "uniqueItems": True},
            "uniqueItems",
        ),
        ({"enum": ["a", 1]}, "enum"),
    ],
)
def test_unmodelled_constraints_project_to_unsupported_shapes(
    field_schema: dict, type_name: str
) -> None:
    document = load_schema_document(
        _json_config(
            {"type": "object", "required": ["field"], "properties": {"field": field_schema}}
        )
    )
    root = resolve_shape(document.node)

    assert isinstance(root, ObjectShape)
    assert root.fields["field"] == UnsupportedShape(type_name=type_name)


@pytest.mark.parametrize(
    ("field_schema", "message"),
    [
        ({"type": "string", "minLength": -1}, "'minLength' at #/properties/field"),
        ({"type": "array", "items": {"type": "string"}, "minItems": "2"}, "'minItems'"),
        ({"type": "string", "enum": []}, "'enum' at #/properties/field"),
    ],
)
def test_malformed_leaf_constraints_are_rejected(field_schema: dict, message: str) -> None:
    with pytest.raises(SchemaError, match=message):
        load_schema_document(
            _json_config({"type": "object", "properties": {"field": field_schema}})
        )
