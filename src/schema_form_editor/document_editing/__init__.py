"""Document editing exports."""

from .default_synthesis import synthesize_default
from .document_paths import (
    ABSENT,
    DocumentValue,
    PathAddress,
    PathSegment,
    format_address,
    get_value,
    is_index,
    parse_address,
)
from .mutation_engine import AddressKindMismatch, insert_array_item, remove_array_item, set_value

__all__ = [
    "ABSENT",
    "DocumentValue",
    "PathAddress",
    "PathSegment",
    "AddressKindMismatch",
    "format_address",
    "get_value",
    "insert_array_item",
    "is_index",
    "parse_address",
    "remove_array_item",
    "set_value",
    "synthesize_default",
]
