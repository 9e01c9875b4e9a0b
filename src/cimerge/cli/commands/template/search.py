"""Template search subcommand.

Case-insensitive substring search across template names and descriptions.
"""

from __future__ import annotations

import click
from rich.table import Table

from cimerge.cli.common import cli_error_handler, get_discovery_result
from cimerge.cli.console import console
from cimerge.cli.output import format_json

from ._group import template


@template.command("search")
@click.argument("query")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
@click.pass_context
def template_search(ctx: click.Context, query: str, fmt: str) -> None:
    """Search templates by name or description.

    QUERY is the search string (case-insensitive substring match).

    Examples:
        cimerge template search python
        cimerge template search "type check"
        cimerge template search docs --format json
    """
    with cli_error_handler():
        matches = get_discovery_result(ctx).search(query)

        if fmt == "json":
            data = [
                {
                    "name": t.name,
                    "description": t.template.description,
                    "source": t.source.value,
                    "file": str(t.file_path),
                }
                for t in matches
            ]
            click.echo(format_json(data))
            return

        if not matches:
            click.echo(f"No templates found matching '{query}'")
            return

        table = Table(title="Workflow templates")
        table.add_column("Name", style="bold")
        table.add_column("Source")
        table.add_column("Description")
        for t in matches:
            table.add_row(t.name, t.source.value, t.template.description[:50])
        console.print(table)

        click.echo()
        click.echo(f"Found {len(matches)} template(s) matching '{query}'")
