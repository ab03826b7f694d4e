"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaConfig:
    """Normalized schema settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class DocumentConfig:
    """Location of the saved document to edit."""

    path: Path | None

    def read_text(self) -> str | None:
        """Return the saved document text, or None when there is nothing saved yet."""
        if self.path is None or not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")


@dataclass(frozen=True)
class EditingSettings:
    """Options applied to document edits."""

    strict_addresses: bool = False


@dataclass(frozen=True)
class EditorConfiguration:
    """Aggregate editor configuration."""

    path: Path
    schema: SchemaConfig
    document: DocumentConfig
    editing: EditingSettings
