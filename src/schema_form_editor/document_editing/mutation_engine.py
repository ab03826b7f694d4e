"""Copy-on-write edits of document values at nested addresses."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from schema_form_editor.schema_management import (
    ArrayShape,
    SchemaNode,
    resolve_shape,
    resolve_shape_at,
)

from .default_synthesis import synthesize_default
from .document_paths import ABSENT, PathSegment, format_address, get_value, is_index

_LOGGER = logging.getLogger(__name__)


class AddressKindMismatch(Exception):
    """Raised in strict mode when an address segment disagrees with the document or schema."""


def set_value(
    document: Any, address: Sequence[PathSegment], value: Any, *, strict: bool = False
) -> Any:
    """Return a new document with ``value`` stored at ``address``.

    Every container on the path is copied; everything else is shared with
    ``document``, which is never modified. Missing or mismatched intermediate
    containers are replaced by an object or array chosen from the kind of the
    segment that follows, unless ``strict`` is set, in which case a mismatch
    raises ``AddressKindMismatch``. The empty address replaces the whole
    document.
    """
    path = tuple(address)
    if not path:
        return value
    return _assign(document, path, 0, value, strict)


def insert_array_item(
    schema: SchemaNode, document: Any, address: Sequence[PathSegment], *, strict: bool = False
) -> Any:
    """Append a synthesized default element to the array at ``address``."""
    path = tuple(address)
    node = resolve_shape_at(schema, path)
    shape = resolve_shape(node) if node is not None else None
    if not isinstance(shape, ArrayShape):
        raise AddressKindMismatch(
            f"Schema has no array at address '{format_address(path)}'."
        )

    current = get_value(document, path)
    if isinstance(current, list):
        items = list(current)
    else:
        _check_replaceable(current, path, "array", strict)
        items = []
    new_item = synthesize_default(shape.element)
    items.append(None if new_item is ABSENT else new_item)
    return set_value(document, path, items, strict=strict)


def remove_array_item(
    document: Any, address: Sequence[PathSegment], index: int, *, strict: bool = False
) -> Any:
    """Return a new document without element ``index`` of the array at ``address``.

    Removing an index that does not exist leaves the document unchanged.
    """
    path = tuple(address)
    current = get_value(document, path)
    if not isinstance(current, list):
        if strict and current is not ABSENT and current is not None:
            raise AddressKindMismatch(
                f"Expected array at '{format_address(path)}', found {type(current).__name__}."
            )
        _LOGGER.debug("Nothing to remove at '%s': no array present", format_address(path))
        return document
    if not is_index(index) or not 0 <= index < len(current):
        _LOGGER.debug(
            "Nothing to remove at '%s': index %s out of range", format_address(path), index
        )
        return document
    remaining = [item for position, item in enumerate(current) if position != index]
    return set_value(document, path, remaining, strict=strict)


def _assign(
    container: Any, path: tuple[PathSegment, ...], depth: int, value: Any, strict: bool
) -> Any:
    segment = path[depth]
    if is_index(segment):
        if segment < 0:  # type: ignore[operator]
            raise ValueError(f"Array index must not be negative: {format_address(path)}")
        copied: Any = _copy_list(container, path[:depth], strict)
    else:
        copied = _copy_mapping(container, path[:depth], strict)

    if depth + 1 < len(path):
        child = get_value(copied, (segment,))
        value = _assign(child, path, depth + 1, value, strict)

    if isinstance(copied, list):
        _store_in_list(copied, segment, value)  # type: ignore[arg-type]
    else:
        copied[segment] = value
    return copied


def _copy_list(container: Any, location: tuple[PathSegment, ...], strict: bool) -> list[Any]:
    if isinstance(container, list):
        return list(container)
    _check_replaceable(container, location, "array", strict)
    return []


def _copy_mapping(
    container: Any, location: tuple[PathSegment, ...], strict: bool
) -> dict[str, Any]:
    if isinstance(container, Mapping):
        return dict(container)
    _check_replaceable(container, location, "object", strict)
    return {}


def _check_replaceable(
    current: Any, location: tuple[PathSegment, ...], expected: str, strict: bool
) -> None:
    if current is ABSENT or current is None:
        _LOGGER.debug("Creating missing %s at '%s'", expected, format_address(location))
        return
    if strict:
        raise AddressKindMismatch(
            f"Expected {expected} at '{format_address(location)}', "
            f"found {type(current).__name__}."
        )
    _LOGGER.warning(
        "Replacing %s at '%s' with an empty %s",
        type(current).__name__,
        format_address(location),
        expected,
    )


def _store_in_list(items: list[Any], index: int, value: Any) -> None:
    if index < len(items):
        items[index] = value
        return
    items.extend([None] * (index - len(items)))
    items.append(value)
