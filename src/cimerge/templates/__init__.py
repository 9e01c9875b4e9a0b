"""Workflow template models, parsing and serialization.

    from cimerge.templates import WorkflowTemplate, load_template
"""

from __future__ import annotations

from cimerge.templates.parser import (
    extract_inputs,
    load_template,
    parse_template,
    parse_yaml,
)
from cimerge.templates.schema import (
    ParameterSpec,
    ParameterType,
    WorkflowTemplate,
    conforms,
    empty_value,
)
from cimerge.templates.writer import dump_template, template_to_dict

__all__ = [
    # Schema
    "ParameterSpec",
    "ParameterType",
    "WorkflowTemplate",
    "conforms",
    "empty_value",
    # Parser
    "extract_inputs",
    "load_template",
    "parse_template",
    "parse_yaml",
    # Writer
    "dump_template",
    "template_to_dict",
]
