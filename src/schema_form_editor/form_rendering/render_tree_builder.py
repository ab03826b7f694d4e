"""Builds render trees by walking a schema and a document together."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from schema_form_editor.document_editing import ABSENT, PathSegment
from schema_form_editor.schema_management import (
    NO_DEFAULT,
    ArrayShape,
    Deferred,
    NumberLeaf,
    ObjectShape,
    SchemaError,
    SchemaNode,
    StringLeaf,
    UnsupportedShape,
    node_description,
    wrapper_chain,
)

from .render_models import NodeKind, RenderNode

_LOGGER = logging.getLogger(__name__)

ROOT_LABEL = "Document"
ITEM_LABEL = "Item"


def build_render_tree(
    schema: SchemaNode,
    document: Any,
    address: Sequence[PathSegment] = (),
    label: str | None = None,
) -> RenderNode:
    """Walk ``schema`` and ``document`` together into a tree of render nodes.

    Fields missing from the document are rendered with an ``ABSENT`` value.
    Shapes the engine cannot edit become ``UNSUPPORTED`` placeholder nodes, so
    building never fails because of one field. Where the document has no data,
    a self-referential shape is expanded once per branch and then collapsed.
    """
    return _build(
        schema,
        document,
        tuple(address),
        label or _describe(schema) or ROOT_LABEL,
        frozenset(),
    )


def _build(
    node: SchemaNode,
    value: Any,
    address: tuple[PathSegment, ...],
    label: str,
    expanded: frozenset[Deferred],
) -> RenderNode:
    try:
        layers = wrapper_chain(node)
    except SchemaError as exc:
        _LOGGER.debug("Unresolvable shape at %s: %s", address, exc)
        return RenderNode(
            kind=NodeKind.UNSUPPORTED,
            label=label,
            address=address,
            value=value,
            shape=UnsupportedShape(type_name="unresolved"),
        )

    shape = layers[-1]
    fallback = next(
        (layer.default_value for layer in layers if getattr(layer, "has_default", False)),
        NO_DEFAULT,
    )

    if isinstance(shape, ObjectShape):
        references = frozenset(layer for layer in layers if isinstance(layer, Deferred))
        if value is ABSENT and references & expanded:
            return RenderNode(
                kind=NodeKind.OBJECT,
                label=label,
                address=address,
                value=value,
                shape=shape,
                fallback=fallback,
                collapsed=True,
            )
        branch = expanded | references if value is ABSENT else frozenset()
        fields = value if isinstance(value, Mapping) else {}
        children = tuple(
            _build(
                field_node,
                fields.get(name, ABSENT),
                (*address, name),
                _describe(field_node) or name,
                branch,
            )
            for name, field_node in shape.fields.items()
        )
        return RenderNode(
            kind=NodeKind.OBJECT,
            label=label,
            address=address,
            value=value,
            shape=shape,
            children=children,
            fallback=fallback,
        )

    if isinstance(shape, ArrayShape):
        items = value if isinstance(value, list) else []
        item_label = _describe(shape.element) or ITEM_LABEL
        children = tuple(
            _build(
                shape.element, item, (*address, index), f"{item_label} {index + 1}", frozenset()
            )
            for index, item in enumerate(items)
        )
        return RenderNode(
            kind=NodeKind.ARRAY,
            label=label,
            address=address,
            value=value,
            shape=shape,
            children=children,
            fallback=fallback,
        )

    if isinstance(shape, StringLeaf):
        kind = NodeKind.STRING
    elif isinstance(shape, NumberLeaf):
        kind = NodeKind.NUMBER
    else:
        _LOGGER.debug("Unsupported shape %r at %s", shape, address)
        kind = NodeKind.UNSUPPORTED
    return RenderNode(
        kind=kind,
        label=label,
        address=address,
        value=value,
        shape=shape,  # type: ignore[arg-type]
        fallback=fallback,
    )


def _describe(node: SchemaNode) -> str | None:
    try:
        return node_description(node)
    except SchemaError:
        return None
