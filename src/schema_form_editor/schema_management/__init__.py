"""Schema management exports."""

from .schema_models import SchemaDocument
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
from .schema_projection import load_schema_document, project_schema
from .schema_registry import SchemaRegistry
from .type_resolution import (
    SchemaCycleError,
    SchemaError,
    check_schema_graph,
    node_description,
    node_fallback,
    resolve_shape,
    resolve_shape_at,
    wrapper_chain,
)

__all__ = [
    "NO_DEFAULT",
    "ArrayShape",
    "Deferred",
    "NumberLeaf",
    "ObjectShape",
    "SchemaNode",
    "StringLeaf",
    "TerminalShape",
    "UnsupportedShape",
    "Wrapped",
    "SchemaDocument",
    "SchemaRegistry",
    "SchemaError",
    "SchemaCycleError",
    "check_schema_graph",
    "load_schema_document",
    "node_description",
    "node_fallback",
    "project_schema",
    "resolve_shape",
    "resolve_shape_at",
    "wrapper_chain",
]
