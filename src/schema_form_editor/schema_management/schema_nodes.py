"""Schema shape entities understood by the form engine."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class _NoDefault(Enum):
    NO_DEFAULT = "no_default"


NO_DEFAULT = _NoDefault.NO_DEFAULT


@dataclass(frozen=True)
class ObjectShape:
    """Object with an ordered set of named fields."""

    fields: Mapping[str, SchemaNode]
    description: str | None = None


@dataclass(frozen=True)
class ArrayShape:
    """Homogeneous array of one element shape."""

    element: SchemaNode
    description: str | None = None
    min_items: int = 0


@dataclass(frozen=True)
class StringLeaf:
    """Free text value, optionally restricted to a minimum length or fixed choices."""

    description: str | None = None
    min_length: int = 0
    choices: tuple[object, ...] = ()


@dataclass(frozen=True)
class NumberLeaf:
    """Numeric value with optional inclusive and exclusive bounds."""

    minimum: float | None = None
    maximum: float | None = None
    description: str | None = None
    integer: bool = False
    exclusive_minimum: float | None = None
    exclusive_maximum: float | None = None
    choices: tuple[object, ...] = ()


@dataclass(frozen=True)
class Wrapped:
    """Transparent wrapper carrying a fallback value (defaulted or optional fields)."""

    inner: SchemaNode
    default_value: object = NO_DEFAULT
    description: str | None = None

    @property
    def has_default(self) -> bool:
        """Return True when the wrapper declares a fallback value."""
        return self.default_value is not NO_DEFAULT


@dataclass(frozen=True, eq=False)
class Deferred:
    """Lazy reference to another schema node, resolved at traversal time.

    Equality and hashing use object identity, so a ``Deferred`` can be tracked
    in the ``seen`` sets used while walking self-referential schemas.
    """

    name: str
    target: Callable[[], SchemaNode] = field(repr=False)
    description: str | None = None

    def resolve(self) -> SchemaNode:
        """Return the referenced node."""
        return self.target()


@dataclass(frozen=True)
class UnsupportedShape:
    """Placeholder for a schema shape outside the supported set."""

    type_name: str
    description: str | None = None


TerminalShape = Union[ObjectShape, ArrayShape, StringLeaf, NumberLeaf, UnsupportedShape]
SchemaNode = Union[
    ObjectShape, ArrayShape, StringLeaf, NumberLeaf, Wrapped, Deferred, UnsupportedShape
]
