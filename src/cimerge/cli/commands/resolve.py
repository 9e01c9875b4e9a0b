"""Resolve and caller commands.

Both commands take a template (name or file), a set of overrides, and an
optional preset, then resolve them. ``resolve`` prints the effective
configuration; ``caller`` prints the job a downstream repository needs to
invoke the template with the same configuration.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from cimerge.cli.common import (
    build_request,
    cli_error_handler,
    get_cli_context,
    get_discovery_result,
)
from cimerge.cli.output import OutputFormat
from cimerge.discovery import find_template
from cimerge.logging import bind_context, clear_context, get_logger
from cimerge.presets import apply_preset, preset_names
from cimerge.rendering import render_caller_job, render_resolved
from cimerge.resolver import ResolvedConfiguration, resolve
from cimerge.templates.schema import WorkflowTemplate

__all__ = ["resolve_command", "caller_command"]

F = TypeVar("F", bound=Callable[..., Any])


def _invocation_options(f: F) -> F:
    f = click.option(
        "--preset",
        type=click.Choice(list(preset_names())),
        default=None,
        help="Preset applied underneath the supplied inputs.",
    )(f)
    f = click.option(
        "--input-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Load inputs from a JSON/YAML file.",
    )(f)
    f = click.option(
        "-i",
        "--input",
        "inputs",
        multiple=True,
        help="Input parameter (NAME=VALUE format).",
    )(f)
    return click.argument("name_or_file")(f)


def _resolve_invocation(
    ctx: click.Context,
    name_or_file: str,
    inputs: tuple[str, ...],
    input_file: Path | None,
    preset: str | None,
) -> tuple[WorkflowTemplate, ResolvedConfiguration]:
    logger = get_logger(__name__)
    config = get_cli_context(ctx).config

    workflow_template, file_path = find_template(
        name_or_file, get_discovery_result(ctx)
    )
    request = build_request(workflow_template, inputs, input_file)

    preset = preset or config.default_preset
    if preset:
        request = apply_preset(preset, workflow_template, request)

    bind_context(template=workflow_template.name)
    try:
        resolved = resolve(workflow_template, request)
        logger.info(
            "template_resolved",
            file=str(file_path),
            preset=preset,
            supplied=sorted(resolved.supplied),
        )
    finally:
        clear_context()
    return workflow_template, resolved


@click.command("resolve")
@_invocation_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (defaults to output.format from config).",
)
@click.pass_context
def resolve_command(
    ctx: click.Context,
    name_or_file: str,
    inputs: tuple[str, ...],
    input_file: Path | None,
    preset: str | None,
    fmt: str | None,
) -> None:
    """Resolve a template's inputs against the supplied overrides.

    NAME_OR_FILE can be either a template name (from discovery) or a file
    path. String inputs are passed through untouched; other inputs given
    with -i are decoded as JSON (true, false, numbers).

    Examples:
        cimerge resolve python-ci -i package-name=foo
        cimerge resolve python-ci -i package-name=foo -i run-lint=false
        cimerge resolve python-ci --input-file inputs.yaml --format json
        cimerge resolve python-ci -i package-name=foo --format env >> "$GITHUB_OUTPUT"
    """
    with cli_error_handler():
        _, resolved = _resolve_invocation(ctx, name_or_file, inputs, input_file, preset)
        fmt = fmt or get_cli_context(ctx).config.output.format
        click.echo(render_resolved(resolved, fmt).rstrip("\n"))


@click.command("caller")
@_invocation_options
@click.option(
    "--uses",
    required=True,
    help="Reusable workflow reference, e.g. org/repo/.github/workflows/ci.yaml@v1.",
)
@click.option(
    "--job-id",
    default=None,
    help="Job key in the generated snippet (defaults to output.caller_job_id).",
)
@click.pass_context
def caller_command(
    ctx: click.Context,
    name_or_file: str,
    inputs: tuple[str, ...],
    input_file: Path | None,
    preset: str | None,
    uses: str,
    job_id: str | None,
) -> None:
    """Print the job a downstream repository uses to call a template.

    Only required inputs and values that differ from the template defaults
    appear under ``with:``.

    Examples:
        cimerge caller python-ci --uses org/ci/.github/workflows/python-ci.yaml@v1 \\
            -i package-name=foo --preset full
    """
    with cli_error_handler():
        workflow_template, resolved = _resolve_invocation(
            ctx, name_or_file, inputs, input_file, preset
        )
        job_id = job_id or get_cli_context(ctx).config.output.caller_job_id
        click.echo(
            render_caller_job(resolved, workflow_template, uses, job_id=job_id),
            nl=False,
        )
