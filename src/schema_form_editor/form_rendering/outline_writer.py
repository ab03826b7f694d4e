"""Plain-text outline of a render tree."""

from __future__ import annotations

import json
from typing import Any

from schema_form_editor.document_editing import format_address
from schema_form_editor.schema_management import NO_DEFAULT, UnsupportedShape

from .render_models import NodeKind, RenderNode

_INDENT = "  "


def write_outline(root: RenderNode) -> str:
    """Render ``root`` as indented lines, one per node."""
    lines: list[str] = []
    _append_lines(root, 0, lines)
    return "\n".join(lines)


def _append_lines(node: RenderNode, depth: int, lines: list[str]) -> None:
    location = format_address(node.address) or "<root>"
    line = f"{_INDENT * depth}{node.label} ({location})"
    summary = _describe_value(node)
    lines.append(f"{line}: {summary}" if summary else line)
    for child in node.children:
        _append_lines(child, depth + 1, lines)


def _describe_value(node: RenderNode) -> str:
    if node.kind is NodeKind.UNSUPPORTED:
        type_name = node.shape.type_name if isinstance(node.shape, UnsupportedShape) else "?"
        return f"[unsupported: {type_name}]"
    if node.kind is NodeKind.OBJECT:
        return "{...}" if node.collapsed else ""
    if node.kind is NodeKind.ARRAY:
        count = len(node.children)
        return f"[{count} item{'' if count == 1 else 's'}]"
    if node.is_absent:
        if node.fallback is not NO_DEFAULT:
            return f"<absent, default {_format_scalar(node.fallback)}>"
        return "<absent>"
    return _format_scalar(node.value)


def _format_scalar(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)
