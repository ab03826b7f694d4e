"""Document loading entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DocumentState(str, Enum):
    """Lifecycle states of a loaded document.

    ``RAW`` text is checked against the schema and becomes ``VALID`` or
    ``INVALID``. ``VALID`` documents become ``EDITABLE``; ``INVALID`` ones are
    replaced by a synthesized default and end ``DEFAULTED``.
    """

    RAW = "raw"
    VALID = "valid"
    INVALID = "invalid"
    DEFAULTED = "defaulted"
    EDITABLE = "editable"


@dataclass(frozen=True)
class LoadedDocument:
    """Outcome of loading one document against a schema."""

    state: DocumentState
    document: Any
    warnings: tuple[str, ...] = ()

    @property
    def was_defaulted(self) -> bool:
        """Return True when the saved document was replaced by defaults."""
        return self.state is DocumentState.DEFAULTED
