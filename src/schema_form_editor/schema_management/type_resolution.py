"""Wrapper stripping and address navigation over schema nodes."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .schema_nodes import (
    NO_DEFAULT,
    ArrayShape,
    Deferred,
    NumberLeaf,
    ObjectShape,
    SchemaNode,
    StringLeaf,
    TerminalShape,
    UnsupportedShape,
    Wrapped,
)

_TERMINAL_TYPES = (ObjectShape, ArrayShape, StringLeaf, NumberLeaf, UnsupportedShape)


class SchemaError(Exception):
    """Raised for schema parsing or construction failures."""


class SchemaCycleError(SchemaError):
    """Raised when a chain of deferred references never reaches a terminal shape."""


def resolve_shape(node: SchemaNode) -> TerminalShape:
    """Strip ``Wrapped`` and ``Deferred`` layers until a terminal shape is reached.

    Objects outside the known node types resolve to an ``UnsupportedShape``
    placeholder named after their Python type.
    """
    *_, terminal = _unwrap_chain(node)
    return terminal  # type: ignore[return-value]


def node_description(node: SchemaNode) -> str | None:
    """Return the outermost description found along the wrapper chain."""
    for layer in _unwrap_chain(node):
        description = getattr(layer, "description", None)
        if description:
            return description
    return None


def node_fallback(node: SchemaNode) -> object:
    """Return the outermost declared default along the wrapper chain, or ``NO_DEFAULT``."""
    for layer in _unwrap_chain(node):
        if isinstance(layer, Wrapped) and layer.has_default:
            return layer.default_value
    return NO_DEFAULT


def resolve_shape_at(
    schema: SchemaNode, address: Sequence[str | int]
) -> SchemaNode | None:
    """Navigate ``schema`` along ``address``.

    Returns the (unresolved) node found at the address, or None when a segment
    does not match the shape at its depth.
    """
    node = schema
    for segment in address:
        shape = resolve_shape(node)
        if isinstance(shape, ObjectShape) and isinstance(segment, str):
            if segment not in shape.fields:
                return None
            node = shape.fields[segment]
        elif isinstance(shape, ArrayShape) and _is_index(segment):
            node = shape.element
        else:
            return None
    return node


def check_schema_graph(root: SchemaNode) -> None:
    """Resolve every node reachable from ``root`` once.

    Raises:
      SchemaCycleError: If a deferred chain never reaches a terminal shape.
      SchemaError: If a deferred reference cannot be resolved.
    """
    pending: list[SchemaNode] = [root]
    visited: set[int] = set()
    while pending:
        node = pending.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))
        shape = resolve_shape(node)
        if isinstance(shape, ObjectShape):
            pending.extend(shape.fields.values())
        elif isinstance(shape, ArrayShape):
            pending.append(shape.element)


def wrapper_chain(node: SchemaNode) -> tuple[SchemaNode, ...]:
    """Return every layer from ``node`` down to its terminal shape, inclusive."""
    return tuple(_unwrap_chain(node))


def _unwrap_chain(node: SchemaNode) -> Iterator[SchemaNode]:
    seen: list[Deferred] = []
    current: object = node
    while True:
        yield current  # type: ignore[misc]
        if isinstance(current, Wrapped):
            current = current.inner
        elif isinstance(current, Deferred):
            if current in seen:
                chain = " -> ".join(item.name for item in [*seen, current])
                raise SchemaCycleError(f"Schema reference cycle without a terminal shape: {chain}")
            seen.append(current)
            current = current.resolve()
        elif isinstance(current, _TERMINAL_TYPES):
            return
        else:
            yield UnsupportedShape(type_name=type(current).__name__)
            return


def _is_index(segment: object) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool) and segment >= 0
