"""Form rendering exports."""

from .outline_writer import write_outline
from .render_models import NodeKind, RenderNode
from .render_tree_builder import ITEM_LABEL, ROOT_LABEL, build_render_tree

__all__ = [
    "ITEM_LABEL",
    "ROOT_LABEL",
    "NodeKind",
    "RenderNode",
    "build_render_tree",
    "write_outline",
]
