"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from restdocs_schema_validator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from restdocs_schema_validator.instance_validation import validate_document
from restdocs_schema_validator.results_writing import (
    render_violations_json,
    render_violations_text,
)
from restdocs_schema_validator.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_validation_run,
)
from restdocs_schema_validator.schema_management import (
    SchemaCatalog,
    SchemaError,
    check_schema,
    convert_draft3_schema,
    flatten_schema,
    is_draft3,
    read_schema_document,
)

VIOLATIONS_EXIT_CODE = 1
CONFIGURATION_ERROR_EXIT_CODE = 2


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="restdocs-schema-validator")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Validate JSON documents against REST resource schemas (JSON Schema draft-03)."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="validate")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the resource schema file",
)
@click.option(
    "--instance",
    "instance_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON document to validate",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format for the violation report",
)
@click.option(
    "--no-format-check",
    is_flag=True,
    default=False,
    help="Do not enforce `format` assertions such as uri or email.",
)
@click.pass_context
def validate_command(
    ctx: click.Context,
    schema_path: str,
    instance_path: str,
    output_format: str,
    no_format_check: bool,
) -> None:
    """Validate one JSON document; exits with 1 when violations are found."""
    try:
        document = read_schema_document(schema_path)
        instance = _read_json(instance_path)
        result = validate_document(document, instance, check_formats=not no_format_check)
    except SchemaError as exc:
        raise CliError(str(exc)) from exc

    if output_format == "json":
        click.echo(render_violations_json(result))
    else:
        click.echo(render_violations_text(result, label=Path(instance_path).name))
    if not result.is_valid:
        ctx.exit(VIOLATIONS_EXIT_CODE)


@cli.command(name="convert")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the draft-03 schema file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional file to write the draft-07 schema to",
)
def convert(schema_path: str, output_path: str | None) -> None:
    """Print the draft-07 equivalent of a draft-03 schema."""
    try:
        document = read_schema_document(schema_path)
        if not is_draft3(document.root):
            raise CliError(f"{document.name} is not a draft-03 schema.")
        check_schema(document.root)
        converted = convert_draft3_schema(document.root)
    except SchemaError as exc:
        raise CliError(str(exc)) from exc

    text = json.dumps(converted, ensure_ascii=False, indent=2)
    if output_path is None:
        click.echo(text)
        return
    try:
        destination = Path(output_path)
        destination.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination.resolve()))


@cli.command(name="fields")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the resource schema file",
)
def fields(schema_path: str) -> None:
    """List the flattened fields of a schema with their flags."""
    try:
        flattened = flatten_schema(read_schema_document(schema_path))
    except SchemaError as exc:
        raise CliError(str(exc)) from exc
    for field in flattened:
        types = "|".join(field.type_names) or "-"
        flags = [
            name
            for name, enabled in (
                ("required", field.required),
                ("sortable", field.sortable),
                ("filterable", field.filterable),
                ("readOnly", field.read_only),
            )
            if enabled
        ]
        click.echo(f"{field.path}\t{types}\t{','.join(flags) or '-'}")


@cli.command(name="catalog")
@click.option(
    "--schema-dir",
    "schema_dir",
    required=True,
    type=click.Path(path_type=str),
    help="Directory holding `<resource>.<verb>.schema.json` files",
)
def catalog(schema_dir: str) -> None:
    """List the resources documented by a schema directory."""
    try:
        schema_catalog = SchemaCatalog.from_directory(schema_dir)
    except SchemaError as exc:
        raise CliError(str(exc)) from exc
    for document in schema_catalog:
        resource = document.resource
        label = resource.label if resource else "-"
        line = f"{label}\t{document.name}"
        if resource and resource.restdocs_url:
            line += f"\t{resource.restdocs_url}"
        click.echo(line)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
@click.pass_context
def run_cases(ctx: click.Context, config_path: str, output_dir: str | None) -> None:
    """Validate every configured case and write a results workbook."""
    try:
        outcome = execute_validation_run(
            RunRequest(config_path=config_path, output_dir=output_dir)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))
    click.echo(
        f"total={outcome.total} passed={outcome.passed} "
        f"failed={outcome.failed} skipped={outcome.skipped}",
        err=True,
    )
    if not outcome.all_passed:
        ctx.exit(VIOLATIONS_EXIT_CODE)


def _read_json(path: str) -> Any:
    instance_file = Path(path)
    try:
        return json.loads(instance_file.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CliError(f"Failed to read instance file {instance_file}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CliError(f"Invalid JSON in instance file {instance_file}: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return CONFIGURATION_ERROR_EXIT_CODE
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
