"""Render resolved configurations for downstream consumers.

- render_outputs: ``key=value`` lines for a CI step output file
- render_json / render_yaml: machine-readable dumps
- render_text: aligned human-readable listing
- render_caller_job: a job that invokes the template with only the
  values that differ from its defaults
"""

from __future__ import annotations

import json
import secrets
from typing import Any

import yaml

from cimerge.resolver import ResolvedConfiguration
from cimerge.templates.schema import WorkflowTemplate

__all__ = [
    "OUTPUT_DELIMITER_PREFIX",
    "format_scalar",
    "heredoc_delimiter",
    "render_outputs",
    "render_json",
    "render_yaml",
    "render_text",
    "caller_inputs",
    "render_caller_job",
    "render_resolved",
]

OUTPUT_DELIMITER_PREFIX = "CIMERGE_EOF"


def format_scalar(value: Any) -> str:
    """Format a resolved value the way CI expressions print it.

    Booleans become ``true``/``false``; integral floats drop the ``.0``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def heredoc_delimiter(text: str) -> str:
    """Return a random delimiter that does not occur in ``text``."""
    while True:
        delimiter = f"{OUTPUT_DELIMITER_PREFIX}_{secrets.token_hex(8)}"
        if delimiter not in text:
            return delimiter


def render_outputs(resolved: ResolvedConfiguration) -> str:
    """Render ``name=value`` lines, sorted by name.

    Multi-line values use the ``name<<DELIMITER`` heredoc form accepted by
    step output files. Each block gets its own random delimiter, which never
    occurs inside the value.
    """
    lines: list[str] = []
    for name in sorted(resolved):
        text = format_scalar(resolved[name])
        if "\n" in text or "\r" in text:
            delimiter = heredoc_delimiter(text)
            lines.extend([f"{name}<<{delimiter}", text, delimiter])
        else:
            lines.append(f"{name}={text}")
    return "\n".join(lines) + "\n"


def render_json(resolved: ResolvedConfiguration) -> str:
    return json.dumps(resolved.to_dict(), indent=2, sort_keys=True)


def render_yaml(resolved: ResolvedConfiguration) -> str:
    result: str = yaml.safe_dump(
        resolved.to_dict(),
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )
    return result


def render_text(resolved: ResolvedConfiguration) -> str:
    """Aligned listing with the origin of every value."""
    names = sorted(resolved)
    width = max((len(name) for name in names), default=0)
    lines = [f"Template: {resolved.template_name}"]
    for name in names:
        origin = "supplied" if name in resolved.supplied else "default"
        lines.append(
            f"  {name.ljust(width)}  {format_scalar(resolved[name])}  ({origin})"
        )
    return "\n".join(lines)


def render_resolved(resolved: ResolvedConfiguration, fmt: str) -> str:
    """Render in one of ``json``, ``yaml``, ``env`` or ``text``."""
    renderers = {
        "json": render_json,
        "yaml": render_yaml,
        "env": render_outputs,
        "text": render_text,
    }
    try:
        renderer = renderers[fmt]
    except KeyError:
        raise ValueError(f"Unsupported output format: {fmt}") from None
    return renderer(resolved)


def caller_inputs(
    resolved: ResolvedConfiguration,
    template: WorkflowTemplate,
) -> dict[str, Any]:
    """Values a caller has to pass to reproduce ``resolved``.

    Required parameters are always included. Other parameters are only
    included when their value differs from the template's effective default.
    """
    inputs: dict[str, Any] = {}
    for spec in template.iter_parameters():
        value = resolved[spec.name]
        if spec.required or value != spec.effective_default:
            inputs[spec.name] = value
    return inputs


def render_caller_job(
    resolved: ResolvedConfiguration,
    template: WorkflowTemplate,
    uses: str,
    job_id: str = "ci",
) -> str:
    """Render a ``jobs:`` block that calls the template.

    Args:
        resolved: Configuration to reproduce.
        template: Template the configuration was resolved against.
        uses: Reference to the reusable workflow,
            e.g. ``org/workflows/.github/workflows/python-ci.yaml@v1``.
        job_id: Key of the generated job.

    Returns:
        YAML text.
    """
    job: dict[str, Any] = {"uses": uses}
    inputs = caller_inputs(resolved, template)
    if inputs:
        job["with"] = inputs
    result: str = yaml.safe_dump(
        {"jobs": {job_id: job}},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return result
