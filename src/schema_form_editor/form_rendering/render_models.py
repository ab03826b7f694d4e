"""Render tree entities handed to presentation layers."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from schema_form_editor.document_editing import ABSENT, PathAddress, PathSegment
from schema_form_editor.schema_management import NO_DEFAULT, TerminalShape


class NodeKind(str, Enum):
    """Kinds of editable fields a presentation layer draws."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class RenderNode:  # pylint: disable=too-many-instance-attributes
    """One addressable field of a document, paired with its schema shape."""

    kind: NodeKind
    label: str
    address: PathAddress
    value: Any
    shape: TerminalShape
    children: tuple[RenderNode, ...] = ()
    fallback: object = NO_DEFAULT
    collapsed: bool = False

    @property
    def is_absent(self) -> bool:
        """Return True when the document holds no value for this field."""
        return self.value is ABSENT

    @property
    def display_value(self) -> Any:
        """Return the value to show, using the declared default for absent fields."""
        if self.is_absent and self.fallback is not NO_DEFAULT:
            return self.fallback
        return self.value

    def iter_nodes(self) -> Iterator[RenderNode]:
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, address: Sequence[PathSegment]) -> RenderNode | None:
        """Return the descendant at ``address`` (relative to this node), if rendered."""
        node: RenderNode | None = self
        for segment in address:
            if node is None:
                return None
            node = next(
                (child for child in node.children if child.address[-1] == segment), None
            )
        return node
