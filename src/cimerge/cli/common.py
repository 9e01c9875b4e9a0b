from __future__ import annotations

import contextlib
import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import click
import yaml

from cimerge.cli.context import CLIContext, ExitCode
from cimerge.cli.output import format_error
from cimerge.discovery import DiscoveryResult, create_discovery
from cimerge.exceptions import (
    CimergeError,
    PresetNotFoundError,
    ResolutionError,
    TemplateNotFoundError,
    TemplateParseError,
    UnknownParameterError,
)
from cimerge.logging import get_logger
from cimerge.templates.schema import ParameterType, WorkflowTemplate

__all__ = [
    "cli_error_handler",
    "get_cli_context",
    "get_discovery_result",
    "coerce_cli_value",
    "parse_input_pairs",
    "load_input_file",
    "build_request",
]

_RAW_TEXT_TYPES = frozenset({ParameterType.STRING, ParameterType.CHOICE})


def _available_suggestion(kind: str, available: tuple[str, ...]) -> str:
    if not available:
        return f"No {kind}s available."
    shown = ", ".join(available[:5])
    if len(available) > 5:
        shown += f", ... ({len(available)} total)"
    return f"Available {kind}s: {shown}"


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Translate cimerge errors into formatted messages and exit codes.

    - KeyboardInterrupt: exit 130
    - ResolutionError / template errors: formatted message, exit 1
    - Other exceptions: logged with traceback, exit 1
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except UnknownParameterError as e:
        suggestion = _available_suggestion("parameter", e.declared)
        click.echo(format_error(e.message, suggestion=suggestion), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except ResolutionError as e:
        details = [f"Parameter: {e.parameter}"] if e.parameter else None
        click.echo(format_error(e.message, details=details), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except TemplateNotFoundError as e:
        suggestion = _available_suggestion("template", e.available)
        click.echo(format_error(e.message, suggestion=suggestion), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except TemplateParseError as e:
        details = []
        if e.file_path:
            details.append(f"File: {e.file_path}")
        if e.line_number:
            details.append(f"Line: {e.line_number}")
        click.echo(
            format_error(f"Template parsing failed: {e.message}", details=details),
            err=True,
        )
        raise SystemExit(ExitCode.FAILURE) from e
    except PresetNotFoundError as e:
        suggestion = _available_suggestion("preset", e.available)
        click.echo(format_error(e.message, suggestion=suggestion), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except CimergeError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except (click.exceptions.Exit, click.ClickException):
        raise
    except Exception as e:
        logger.exception("unexpected_command_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e


def get_cli_context(ctx: click.Context) -> CLIContext:
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx


def get_discovery_result(ctx: click.Context) -> DiscoveryResult:
    """Run discovery on first use and cache the result on the click context."""
    if "discovery_result" not in ctx.obj:
        config = get_cli_context(ctx).config
        ctx.obj["discovery_result"] = create_discovery(config.templates).discover()
    result: DiscoveryResult = ctx.obj["discovery_result"]
    return result


def coerce_cli_value(template: WorkflowTemplate, name: str, raw: str) -> Any:
    """Turn the text of a ``-i NAME=VALUE`` option into a request value.

    String and choice parameters keep the raw text, so JSON arrays and
    boolean-like strings stay opaque. Other types (and undeclared names) are
    decoded as JSON, falling back to the raw text.
    """
    spec = template.get(name)
    if spec is not None and spec.type in _RAW_TEXT_TYPES:
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_input_pairs(
    template: WorkflowTemplate, pairs: tuple[str, ...]
) -> dict[str, Any]:
    """Parse ``NAME=VALUE`` strings into a request mapping.

    Raises:
        click.BadParameter: If a pair has no ``=``.
    """
    request: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid input format: {pair!r}. Use NAME=VALUE "
                "(e.g. -i package-name=foo)",
                param_hint="'-i' / '--input'",
            )
        name, raw = pair.split("=", 1)
        request[name.strip()] = coerce_cli_value(template, name.strip(), raw)
    return request


def load_input_file(path: Path) -> dict[str, Any]:
    """Load a request mapping from a JSON or YAML file.

    Values are taken as typed by the file format.

    Raises:
        click.BadParameter: If the file does not hold a mapping.
    """
    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise click.BadParameter(
            f"Cannot parse {path}: {e}", param_hint="'--input-file'"
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.BadParameter(
            f"{path} must contain a mapping of input names to values",
            param_hint="'--input-file'",
        )
    return data


def build_request(
    template: WorkflowTemplate,
    pairs: tuple[str, ...],
    input_file: Path | None,
) -> dict[str, Any]:
    """Merge file inputs with ``-i`` pairs; pairs win."""
    request = load_input_file(input_file) if input_file else {}
    request.update(parse_input_pairs(template, pairs))
    return request
