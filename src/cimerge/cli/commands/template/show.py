"""Template show subcommand.

Displays the parameters of a discovered template or a template file.
"""

from __future__ import annotations

import click

from cimerge.cli.common import cli_error_handler, get_discovery_result
from cimerge.discovery import find_template
from cimerge.rendering import format_scalar
from cimerge.templates import dump_template

from ._group import template
from ._helpers import get_source_label


@template.command("show")
@click.argument("name")
@click.option(
    "--yaml",
    "as_yaml",
    is_flag=True,
    default=False,
    help="Print the template in native YAML layout.",
)
@click.pass_context
def template_show(ctx: click.Context, name: str, as_yaml: bool) -> None:
    """Display template metadata and parameters.

    NAME can be either a template name (from discovery) or a file path.

    Examples:
        cimerge template show python-ci
        cimerge template show .github/workflows/reusable-ci.yml --yaml
    """
    with cli_error_handler():
        result = get_discovery_result(ctx)
        workflow_template, file_path = find_template(name, result)

        if as_yaml:
            click.echo(dump_template(workflow_template), nl=False)
            return

        discovered = result.get_template(workflow_template.name)
        from_discovery = (
            discovered is not None and discovered.file_path == file_path.resolve()
        )

        click.echo(f"Template: {workflow_template.name}")
        if from_discovery and discovered is not None:
            click.echo(f"Source: {get_source_label(discovered.source)}")
            for override_source, override_path in discovered.overrides:
                click.echo(f"Overrides: {override_source.value} {override_path}")
        else:
            click.echo(f"Source: {get_source_label('file')}")
        click.echo(f"File: {file_path}")
        if workflow_template.description:
            click.echo(f"Description: {workflow_template.description}")
        click.echo()

        if not workflow_template.parameters:
            click.echo("Parameters: none")
            return

        click.echo(f"Parameters ({len(workflow_template.parameters)}):")
        for spec in workflow_template.iter_parameters():
            parts = [spec.type.value, "required" if spec.required else "optional"]
            if spec.default is not None:
                parts.append(f"default: {format_scalar(spec.default)}")
            if spec.options:
                parts.append(f"options: {', '.join(spec.options)}")
            line = f"  {spec.name} ({', '.join(parts)})"
            if spec.description:
                line += f" - {spec.description}"
            click.echo(line)
