"""Template list subcommand."""

from __future__ import annotations

import click
import yaml
from rich.table import Table

from cimerge.cli.common import cli_error_handler, get_discovery_result
from cimerge.cli.console import console
from cimerge.cli.output import format_json, format_warning

from ._group import template


@template.command("list")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    help="Output format.",
)
@click.option(
    "--source",
    type=click.Choice(["all", "builtin", "user", "project"]),
    default="all",
    help="Filter by source location.",
)
@click.pass_context
def template_list(ctx: click.Context, fmt: str, source: str) -> None:
    """List all discovered templates.

    Discovers templates from builtin, user, and project locations with
    override precedence (project > user > builtin).

    Examples:
        cimerge template list
        cimerge template list --format json
        cimerge template list --source project
    """
    with cli_error_handler():
        result = get_discovery_result(ctx)
        templates = (
            result.templates if source == "all" else result.filter_by_source(source)
        )

        if fmt in ("json", "yaml"):
            data = [
                {
                    "name": t.name,
                    "description": t.template.description,
                    "source": t.source.value,
                    "file": str(t.file_path),
                    "parameters": list(t.template.parameter_names),
                    "required": list(t.template.required_names),
                }
                for t in templates
            ]
            if fmt == "json":
                click.echo(format_json(data))
            else:
                click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
            return

        if not templates:
            click.echo(f"No templates found (source: {source}).")
            return

        table = Table(title="Workflow templates")
        table.add_column("Name", style="bold")
        table.add_column("Source")
        table.add_column("Inputs", justify="right")
        table.add_column("Description")
        for t in templates:
            table.add_row(
                t.name,
                t.source.value,
                str(len(t.template.parameters)),
                t.template.description,
            )
        console.print(table)

        for skipped in result.skipped:
            click.echo(
                format_warning(f"Skipped {skipped.file_path}: {skipped.error_message}"),
                err=True,
            )
