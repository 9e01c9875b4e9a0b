"""Serialize WorkflowTemplate back to the native YAML layout.

Parameters are written in sorted name order; empty descriptions, absent
defaults and absent options are omitted so that the output round-trips
through :func:`cimerge.templates.parser.parse_template`.
"""

from __future__ import annotations

from typing import Any

import yaml

from cimerge.templates.schema import ParameterSpec, WorkflowTemplate

__all__ = ["template_to_dict", "dump_template"]


def _parameter_to_dict(spec: ParameterSpec) -> dict[str, Any]:
    data: dict[str, Any] = {"type": spec.type.value}
    if spec.required:
        data["required"] = True
    if spec.default is not None:
        data["default"] = spec.default
    if spec.options:
        data["options"] = list(spec.options)
    if spec.description:
        data["description"] = spec.description
    return data


def template_to_dict(template: WorkflowTemplate) -> dict[str, Any]:
    data: dict[str, Any] = {"name": template.name}
    if template.description:
        data["description"] = template.description
    data["inputs"] = {
        spec.name: _parameter_to_dict(spec) for spec in template.iter_parameters()
    }
    return data


def dump_template(template: WorkflowTemplate) -> str:
    """Render a template as native-layout YAML."""
    result: str = yaml.safe_dump(
        template_to_dict(template),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return result
