"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .schema_nodes import SchemaNode


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed schema definition together with its projected shape graph."""

    root: Mapping[str, Any]
    node: SchemaNode
    source_path: Path | None = None
