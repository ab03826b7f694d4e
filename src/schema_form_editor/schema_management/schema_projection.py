"""Schema loading and projection of JSON Schema definitions onto schema nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml

from .schema_models import SchemaDocument
from .schema_nodes import (
    NO_DEFAULT,
    ArrayShape,
    NumberLeaf,
    ObjectShape,
    SchemaNode,
    StringLeaf,
    UnsupportedShape,
    Wrapped,
)
from .schema_registry import SchemaRegistry
from .type_resolution import SchemaError, check_schema_graph

if TYPE_CHECKING:
    from schema_form_editor.configuration.runtime_settings import SchemaConfig

_DEFINITION_SECTIONS = ("$defs", "definitions")
# Constraints no synthesized value can be guaranteed to satisfy.
_UNMODELLED_KEYWORDS = ("pattern", "multipleOf", "allOf", "anyOf", "oneOf", "not", "if")
_ROOT_REFERENCE = "#"


def load_schema_document(config: SchemaConfig) -> SchemaDocument:
    """Parse schema text (JSON or YAML) into a structured document."""
    try:
        root = yaml.safe_load(config.text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid schema text: {exc}") from exc

    if not isinstance(root, Mapping):
        raise SchemaError("Schema root must be a mapping.")

    return SchemaDocument(root=root, node=project_schema(root), source_path=config.source_path)


def project_schema(root: Mapping[str, Any]) -> SchemaNode:
    """Project a JSON Schema mapping onto schema nodes.

    ``$ref`` pointers to ``#``, ``#/$defs/<name>`` and ``#/definitions/<name>``
    become deferred references, so definitions may refer to each other in any
    order. The resulting graph is resolved once before it is returned.

    Raises:
      SchemaError: For malformed nodes or references to missing definitions.
      SchemaCycleError: If a reference chain never reaches a concrete shape.
    """
    registry = SchemaRegistry()
    for section_name in _DEFINITION_SECTIONS:
        section = root.get(section_name)
        if section is None:
            continue
        if not isinstance(section, Mapping):
            raise SchemaError(f"Schema '{section_name}' must be a mapping.")
        for name, definition in section.items():
            slot = f"{section_name}/{name}"
            registry.bind(slot, _project_node(definition, registry, f"#/{slot}"))

    node = registry.bind(_ROOT_REFERENCE, _project_node(root, registry, _ROOT_REFERENCE))
    unbound = registry.unbound_names()
    if unbound:
        raise SchemaError(f"Unresolved schema references: {', '.join(sorted(unbound))}")
    check_schema_graph(node)
    return node


def _project_node(node: Any, registry: SchemaRegistry, location: str) -> SchemaNode:
    if isinstance(node, bool):
        return UnsupportedShape(type_name="any" if node else "never")
    if not isinstance(node, Mapping):
        raise SchemaError(f"Schema node at {location} must be a mapping.")

    description = node.get("description")
    if not isinstance(description, str):
        description = None

    wrapper_description = None
    if "$ref" in node:
        inner: SchemaNode = registry.ref(_reference_name(node["$ref"], location))
        wrapper_description = description
    else:
        inner = _project_shape(node, registry, location, description)

    if "default" in node or wrapper_description:
        return Wrapped(
            inner=inner,
            default_value=node["default"] if "default" in node else NO_DEFAULT,
            description=wrapper_description,
        )
    return inner


def _project_shape(
    node: Mapping[str, Any], registry: SchemaRegistry, location: str, description: str | None
) -> SchemaNode:
    for keyword in _UNMODELLED_KEYWORDS:
        if keyword in node:
            return UnsupportedShape(type_name=keyword, description=description)

    choices = _choices(node, location)
    node_types = _json_schema_types(node) or _choice_types(choices)
    if "object" in node_types or (not node_types and "properties" in node):
        return _project_object(node, registry, location, description)

    if "array" in node_types:
        items = node.get("items")
        if items is None:
            raise SchemaError(f"Array schema at {location} requires items.")
        min_items = _optional_count(node, "minItems", location)
        if min_items > 1 and node.get("uniqueItems") is True:
            return UnsupportedShape(type_name="uniqueItems", description=description)
        element = _project_node(items, registry, f"{location}/items")
        return ArrayShape(element=element, description=description, min_items=min_items)

    if "string" in node_types:
        return StringLeaf(
            description=description,
            min_length=_optional_count(node, "minLength", location),
            choices=choices,
        )

    if "number" in node_types or "integer" in node_types:
        return NumberLeaf(
            minimum=_optional_bound(node, "minimum", location),
            maximum=_optional_bound(node, "maximum", location),
            description=description,
            integer="number" not in node_types,
            exclusive_minimum=_optional_bound(node, "exclusiveMinimum", location),
            exclusive_maximum=_optional_bound(node, "exclusiveMaximum", location),
            choices=choices,
        )

    if node_types:
        type_name = node_types[0]
    elif "const" in node:
        type_name = "const"
    elif "enum" in node:
        type_name = "enum"
    else:
        type_name = "unknown"
    return UnsupportedShape(type_name=type_name, description=description)


def _project_object(
    node: Mapping[str, Any], registry: SchemaRegistry, location: str, description: str | None
) -> ObjectShape:
    properties = node.get("properties")
    if properties is None:
        properties = {}
    if not isinstance(properties, Mapping):
        raise SchemaError(f"Object schema at {location} must define properties as a mapping.")
    required = node.get("required") or ()
    if isinstance(required, str) or not all(isinstance(name, str) for name in required):
        raise SchemaError(f"Object schema at {location} must list required names as strings.")

    fields: dict[str, SchemaNode] = {}
    for key, child in properties.items():
        child_node = _project_node(child, registry, f"{location}/properties/{key}")
        fields[str(key)] = child_node if key in required else Wrapped(inner=child_node)
    return ObjectShape(fields=fields, description=description)


def _json_schema_types(node: Mapping[str, Any]) -> tuple[str, ...]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        filtered = [value for value in node_type if isinstance(value, str) and value != "null"]
        return tuple(filtered) if filtered else ("null",)
    if isinstance(node_type, str):
        return (node_type,)
    return ()


def _optional_bound(node: Mapping[str, Any], key: str, location: str) -> float | None:
    value = node.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SchemaError(f"Schema '{key}' at {location} must be a number.")
    return value


def _optional_count(node: Mapping[str, Any], key: str, location: str) -> int:
    value = node.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError(f"Schema '{key}' at {location} must be a non-negative integer.")
    return value


def _choices(node: Mapping[str, Any], location: str) -> tuple[Any, ...]:
    if "const" in node:
        return (node["const"],)
    values = node.get("enum")
    if values is None:
        return ()
    if not isinstance(values, list) or not values:
        raise SchemaError(f"Schema 'enum' at {location} must be a non-empty list.")
    return tuple(values)


def _choice_types(choices: tuple[Any, ...]) -> tuple[str, ...]:
    if not choices:
        return ()
    if all(isinstance(choice, str) for choice in choices):
        return ("string",)
    if all(isinstance(choice, int | float) and not isinstance(choice, bool) for choice in choices):
        return ("integer",) if all(isinstance(choice, int) for choice in choices) else ("number",)
    return ()


def _reference_name(reference: Any, location: str) -> str:
    if not isinstance(reference, str):
        raise SchemaError(f"Schema reference at {location} must be a string.")
    if reference == _ROOT_REFERENCE:
        return _ROOT_REFERENCE
    for section_name in _DEFINITION_SECTIONS:
        prefix = f"#/{section_name}/"
        if reference.startswith(prefix) and len(reference) > len(prefix):
            return f"{section_name}/{reference[len(prefix):]}"
    raise SchemaError(f"Unsupported schema reference '{reference}' at {location}.")
