"""Click CLI entry point for the exporter."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import yaml

from snipsnap_export.config import Settings
from snipsnap_export.document import DocumentError, DocumentParser
from snipsnap_export.exporter import OutputDirectoryError, SnipExporter
from snipsnap_export.logging_config import Reporter, setup_logging


@click.command()
@click.argument("xml_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("element")
@click.argument("fields", nargs=-1)
@click.option(
    "--all-fields", "-a", is_flag=True, help="Export the default fields for ELEMENT"
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    xml_file: Path,
    output_dir: Path,
    element: str,
    fields: tuple[str, ...],
    all_fields: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Export the ELEMENT records of a SnipSnap XML dump into DIR.

    XML_FILE: Path to the XML dump (root element <snipspace>)

    OUTPUT_DIR: Directory to create, one file per exported field

    FIELDS: Field names to export; "attachments" exports every attachment
    """
    reporter = Reporter(prog=ctx.find_root().info_name or "snipexport")

    try:
        settings = Settings.load(config_path) if config_path else Settings.default()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(reporter.format("cannot load settings", e), err=True)
        sys.exit(1)

    setup_logging(settings, verbose)

    field_names = resolve_fields(settings, element, fields, all_fields)

    parser = DocumentParser(settings.export.root_name)
    try:
        document = parser.parse(xml_file)
    except DocumentError as e:
        reporter.error(str(e), e.__cause__)
        sys.exit(1)

    exporter = SnipExporter(settings, reporter)
    try:
        result = exporter.export(document, output_dir, element, field_names)
    except OutputDirectoryError as e:
        reporter.error(str(e), e.cause)
        sys.exit(1)

    if result.records == 0 and settings.export.require_records:
        reporter.error(f"no <{element}> element in {xml_file}")
        sys.exit(1)

    click.echo(
        f"Exported {result.records} records, {result.files_written} files "
        f"({result.missing_fields} missing fields, {result.write_errors} write errors)"
    )


def resolve_fields(
    settings: Settings, element: str, fields: tuple[str, ...], all_fields: bool
) -> list[str]:
    """Work out which fields to export.

    Explicit field names come first; ``--all-fields`` appends the configured
    defaults for the element kind.

    Raises:
        click.UsageError: If a name is empty or nothing is left to export.
    """
    if not element:
        raise click.UsageError("empty element name")
    if any(not name for name in fields):
        raise click.UsageError("empty field name")

    names = list(fields)
    if all_fields:
        try:
            names.extend(settings.fields_for(element))
        except KeyError:
            raise click.UsageError(f"no default fields for <{element}>")
    if not names:
        raise click.UsageError("field names not specified")
    return names


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
