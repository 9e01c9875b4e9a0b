"""Template validate and validate-all subcommands."""

from __future__ import annotations

from pathlib import Path

import click

from cimerge.cli.common import cli_error_handler, get_discovery_result
from cimerge.cli.context import ExitCode
from cimerge.templates import load_template

from ._group import template


@template.command("validate")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def template_validate(file: Path) -> None:
    """Validate a template file.

    Checks YAML syntax, the input declarations, and that every default
    conforms to its declared type.

    Examples:
        cimerge template validate .cimerge/templates/python-ci.yaml
    """
    with cli_error_handler():
        workflow_template = load_template(file)
        click.echo(f"Template '{workflow_template.name}' is valid.")
        click.echo(f"  Parameters: {len(workflow_template.parameters)}")
        required = workflow_template.required_names
        click.echo(f"  Required: {', '.join(required) if required else 'none'}")


@template.command("validate-all")
@click.pass_context
def template_validate_all(ctx: click.Context) -> None:
    """Validate every template file in the discovery locations.

    Exits with a failure code if any file was skipped as invalid.
    """
    with cli_error_handler():
        result = get_discovery_result(ctx)

        ok = click.style("✓", fg="green", bold=True)
        for discovered in result.templates:
            click.echo(f"{ok} {discovered.name} ({discovered.source.value})")

        bad = click.style("✗", fg="red", bold=True)
        for skipped in result.skipped:
            location = str(skipped.file_path)
            if skipped.line_number:
                location += f":{skipped.line_number}"
            click.echo(f"{bad} {location}: {skipped.error_message}")

        click.echo()
        click.echo(f"Valid: {len(result.templates)}  Invalid: {len(result.skipped)}")
        if result.skipped:
            raise SystemExit(ExitCode.FAILURE)
