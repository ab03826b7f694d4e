"""Minimal default values for schema shapes."""

from __future__ import annotations

import logging
import math
from typing import Any

from schema_form_editor.schema_management import (
    ArrayShape,
    Deferred,
    NumberLeaf,
    ObjectShape,
    SchemaNode,
    StringLeaf,
    TerminalShape,
    Wrapped,
    resolve_shape,
)

from .document_paths import ABSENT

_LOGGER = logging.getLogger(__name__)


def synthesize_default(node: SchemaNode, seen: frozenset[Deferred] = frozenset()) -> Any:
    """Build the smallest value matching ``node``.

    Leaves with fixed choices take the first choice. Otherwise strings become
    ``""`` (padded to their minimum length), numbers their lower bound (else 0, else
    their upper bound), arrays their minimum number of synthesized elements and
    objects one synthesized entry per field. A deferred reference already in
    ``seen`` on the current branch yields the empty value of its shape instead
    of being expanded again, so self-referential schemas always terminate.
    Unsupported shapes yield ``ABSENT`` and are left out of objects.
    """
    if isinstance(node, Wrapped):
        return synthesize_default(node.inner, seen)
    if isinstance(node, Deferred):
        if node in seen:
            return _empty_value(resolve_shape(node))
        return synthesize_default(node.resolve(), seen | {node})
    if isinstance(node, ObjectShape):
        synthesized: dict[str, Any] = {}
        for name, field_node in node.fields.items():
            value = synthesize_default(field_node, seen)
            if value is not ABSENT:
                synthesized[name] = value
        return synthesized
    if isinstance(node, ArrayShape):
        return [_array_element(node.element, seen) for _ in range(node.min_items)]
    if isinstance(node, (StringLeaf, NumberLeaf)):
        return _empty_value(node)

    _LOGGER.debug("No default for unsupported shape %r", node)
    return ABSENT


def _array_element(element: SchemaNode, seen: frozenset[Deferred]) -> Any:
    value = synthesize_default(element, seen)
    return None if value is ABSENT else value


def _empty_value(shape: TerminalShape) -> Any:
    if isinstance(shape, ObjectShape):
        return {}
    if isinstance(shape, ArrayShape):
        return []
    if isinstance(shape, StringLeaf):
        return _string_default(shape)
    if isinstance(shape, NumberLeaf):
        return _number_default(shape)
    return ABSENT


def _string_default(shape: StringLeaf) -> Any:
    if shape.choices:
        return shape.choices[0]
    return "x" * shape.min_length


def _number_default(shape: NumberLeaf) -> Any:
    if shape.choices:
        return shape.choices[0]
    lower = _lower_bound(shape)
    if lower is not None:
        return lower
    if _admits(shape, 0):
        return 0
    upper = _upper_bound(shape)
    return 0 if upper is None else upper


def _lower_bound(shape: NumberLeaf) -> int | float | None:
    candidates: list[int | float] = []
    if shape.minimum is not None:
        candidates.append(math.ceil(shape.minimum) if shape.integer else shape.minimum)
    if shape.exclusive_minimum is not None:
        bound = shape.exclusive_minimum
        if shape.integer:
            candidates.append(math.floor(bound) + 1)
        else:
            limit = _upper_limit(shape)
            step = bound + 1
            candidates.append(step if limit is None or step < limit else (bound + limit) / 2)
    return max(candidates) if candidates else None


def _upper_bound(shape: NumberLeaf) -> int | float | None:
    candidates: list[int | float] = []
    if shape.maximum is not None:
        candidates.append(math.floor(shape.maximum) if shape.integer else shape.maximum)
    if shape.exclusive_maximum is not None:
        bound = shape.exclusive_maximum
        candidates.append(math.ceil(bound) - 1 if shape.integer else bound - 1)
    return min(candidates) if candidates else None


def _upper_limit(shape: NumberLeaf) -> float | None:
    limits = [limit for limit in (shape.maximum, shape.exclusive_maximum) if limit is not None]
    return min(limits) if limits else None


def _admits(shape: NumberLeaf, value: int) -> bool:
    if shape.maximum is not None and value > shape.maximum:
        return False
    if shape.exclusive_maximum is not None and value >= shape.exclusive_maximum:
        return False
    return True
