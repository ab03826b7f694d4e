"""Document loading exports."""

from .document_loader import default_document, load_document, validate_document
from .load_states import DocumentState, LoadedDocument

__all__ = [
    "DocumentState",
    "LoadedDocument",
    "default_document",
    "load_document",
    "validate_document",
]
