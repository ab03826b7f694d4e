"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "editor.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Editor configuration template for schema-form-editor.
# Replace every <REQUIRED> placeholder before running show, set, add-item or remove-item.
# Replace <OPTIONAL> placeholders only when your setup needs them.

schema:
  # Provide either an inline JSON Schema text or a schema file path (JSON or YAML).
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

document:
  # Saved document to edit. Leave out to start from the schema defaults.
  path: "<OPTIONAL>"

editing:
  # Reject edits whose address disagrees with the document instead of
  # replacing the mismatched container.
  strict_addresses: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML editor configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder editor configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Editor configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
