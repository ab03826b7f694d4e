"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import yaml

from schema_form_editor.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    EditorConfiguration,
    load_configuration,
    load_configured_schema,
    write_placeholder_configuration,
)
from schema_form_editor.document_editing import (
    AddressKindMismatch,
    insert_array_item,
    parse_address,
    remove_array_item,
    set_value,
)
from schema_form_editor.document_loading import (
    LoadedDocument,
    default_document,
    load_document,
    validate_document,
)
from schema_form_editor.form_rendering import build_render_tree, write_outline
from schema_form_editor.schema_management import SchemaDocument, SchemaError

_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON editor configuration file",
)
_OUTPUT_OPTION = click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the edited document to this path instead of stdout",
)


class CliError(Exception):
    """Custom CLI error."""


@dataclass(frozen=True)
class _EditorSession:
    configuration: EditorConfiguration
    schema: SchemaDocument
    loaded: LoadedDocument


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-form-editor")
@click.option("--verbose", is_flag=True, default=False, help="Log engine decisions to stderr.")
def cli(verbose: bool) -> None:
    """Schema-driven document editor."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML editor configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML editor configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="show")
@_CONFIG_OPTION
def show(config_path: str) -> None:
    """Print the configured document as an outline of editable fields."""
    session = _open_session(config_path)
    tree = build_render_tree(session.schema.node, session.loaded.document)
    click.echo(write_outline(tree))


@cli.command(name="validate")
@_CONFIG_OPTION
def validate(config_path: str) -> None:
    """Check the saved document against the schema without falling back to defaults."""
    configuration, schema = _load_schema(config_path)
    raw_text = _read_document_text(configuration)
    if raw_text is None:
        raise CliError("No saved document configured or found.")
    try:
        issues = validate_document(schema, yaml.safe_load(raw_text))
    except (yaml.YAMLError, SchemaError) as exc:
        raise CliError(str(exc)) from exc
    if issues:
        raise CliError("\n".join(issues))
    click.echo("valid")


@cli.command(name="synthesize")
@_CONFIG_OPTION
@_OUTPUT_OPTION
def synthesize(config_path: str, output_path: str | None) -> None:
    """Print the smallest document matching the schema."""
    _, schema = _load_schema(config_path)
    _emit_document(default_document(schema), output_path)


@cli.command(name="set")
@_CONFIG_OPTION
@_OUTPUT_OPTION
@click.argument("address")
@click.argument("value")
def set_command(config_path: str, output_path: str | None, address: str, value: str) -> None:
    """Store VALUE (parsed as YAML) at the dotted ADDRESS, e.g. items.0.rating."""
    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise CliError(f"Invalid value: {exc}") from exc
    if not _is_json_value(parsed_value):
        raise CliError(f"Value {value!r} is not a JSON value; quote it to store it as text.")
    _apply_edit(
        config_path,
        output_path,
        lambda session, strict: set_value(
            session.loaded.document, _parse_address(address), parsed_value, strict=strict
        ),
    )


@cli.command(name="add-item")
@_CONFIG_OPTION
@_OUTPUT_OPTION
@click.argument("address")
def add_item(config_path: str, output_path: str | None, address: str) -> None:
    """Append a default element to the array at ADDRESS."""
    _apply_edit(
        config_path,
        output_path,
        lambda session, strict: insert_array_item(
            session.schema.node, session.loaded.document, _parse_address(address), strict=strict
        ),
    )


@cli.command(name="remove-item")
@_CONFIG_OPTION
@_OUTPUT_OPTION
@click.argument("address")
@click.argument("index", type=click.IntRange(min=0))
def remove_item(config_path: str, output_path: str | None, address: str, index: int) -> None:
    """Remove element INDEX from the array at ADDRESS."""
    _apply_edit(
        config_path,
        output_path,
        lambda session, strict: remove_array_item(
            session.loaded.document, _parse_address(address), index, strict=strict
        ),
    )


def _apply_edit(
    config_path: str,
    output_path: str | None,
    edit: Callable[[_EditorSession, bool], Any],
) -> None:
    session = _open_session(config_path)
    try:
        document = edit(session, session.configuration.editing.strict_addresses)
    except (AddressKindMismatch, ValueError) as exc:
        raise CliError(str(exc)) from exc
    _emit_document(document, output_path)


def _load_schema(config_path: str) -> tuple[EditorConfiguration, SchemaDocument]:
    try:
        configuration = load_configuration(config_path)
        schema = load_configured_schema(configuration)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    return configuration, schema


def _read_document_text(configuration: EditorConfiguration) -> str | None:
    try:
        return configuration.document.read_text()
    except OSError as exc:
        raise CliError(f"Failed to read document: {exc}") from exc


def _open_session(config_path: str) -> _EditorSession:
    configuration, schema = _load_schema(config_path)
    try:
        loaded = load_document(schema, _read_document_text(configuration))
    except SchemaError as exc:
        raise CliError(str(exc)) from exc
    for warning in loaded.warnings:
        click.echo(f"warning: {warning}", err=True)
    return _EditorSession(configuration=configuration, schema=schema, loaded=loaded)


def _parse_address(text: str) -> tuple[str | int, ...]:
    try:
        return parse_address(text)
    except ValueError as exc:
        raise CliError(str(exc)) from exc


def _is_json_value(value: Any) -> bool:
    if value is None or isinstance(value, str | int | float | bool):
        return True
    if isinstance(value, list):
        return all(_is_json_value(item) for item in value)
    if isinstance(value, dict):
        return all(isinstance(key, str) and _is_json_value(item) for key, item in value.items())
    return False


def _emit_document(document: Any, output_path: str | None) -> None:
    try:
        text = json.dumps(document, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise CliError(f"Document cannot be written as JSON: {exc}") from exc
    if output_path is None:
        click.echo(text)
        return
    destination = Path(output_path)
    try:
        destination.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
