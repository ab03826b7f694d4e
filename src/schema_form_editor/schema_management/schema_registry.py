"""Named slots that let schema nodes reference each other regardless of build order."""

from __future__ import annotations

from .schema_nodes import Deferred, SchemaNode
from .type_resolution import SchemaError


class SchemaRegistry:
    """Registry of named schema definitions.

    ``ref`` hands out one ``Deferred`` per name, usable before the name is
    bound; ``bind`` populates the slot exactly once.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, SchemaNode] = {}
        self._references: dict[str, Deferred] = {}

    def ref(self, name: str) -> Deferred:
        """Return the deferred reference for ``name``."""
        reference = self._references.get(name)
        if reference is None:
            reference = Deferred(name=name, target=lambda: self.lookup(name))
            self._references[name] = reference
        return reference

    def bind(self, name: str, node: SchemaNode) -> SchemaNode:
        """Populate the slot for ``name`` and return ``node``."""
        if name in self._definitions:
            raise SchemaError(f"Schema definition already bound: {name}")
        self._definitions[name] = node
        return node

    def lookup(self, name: str) -> SchemaNode:
        """Return the node bound to ``name``."""
        try:
            return self._definitions[name]
        except KeyError as exc:
            raise SchemaError(f"Unbound schema reference: {name}") from exc

    def unbound_names(self) -> tuple[str, ...]:
        """Return referenced names that were never bound."""
        return tuple(name for name in self._references if name not in self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions
