"""Template YAML parser.

Functions for turning YAML text into a validated WorkflowTemplate:
- parse_yaml: Parse YAML string to dict with error handling
- extract_inputs: Locate the input declarations in either supported layout
- parse_template: Main entry point - parse YAML to WorkflowTemplate
- load_template: Read and parse a template file

Two layouts are accepted. The native layout:

    name: python-ci
    description: Lint, type check and test a Python package
    inputs:
      package-name:
        type: string
        required: true

And a reusable workflow file, whose inputs live under
``on.workflow_call.inputs``:

    name: python-ci
    on:
      workflow_call:
        inputs:
          run-lint:
            type: boolean
            default: true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from cimerge.exceptions import TemplateDefinitionError, TemplateParseError
from cimerge.logging import get_logger
from cimerge.templates.schema import WorkflowTemplate

__all__ = [
    "parse_yaml",
    "extract_inputs",
    "parse_template",
    "load_template",
]

logger = get_logger(__name__)

_PARAMETER_KEYS = frozenset({"type", "required", "default", "description", "options"})


def parse_yaml(yaml_content: str) -> dict[str, Any]:
    """Parse YAML string to dict with error handling.

    Args:
        yaml_content: YAML string to parse.

    Returns:
        Parsed YAML as a dictionary.

    Raises:
        TemplateParseError: If YAML is empty, has syntax errors, or doesn't
            result in a dictionary.
    """
    if not yaml_content or yaml_content.isspace():
        raise TemplateParseError("Empty template content")

    try:
        data = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        line_number = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line_number = mark.line + 1
        raise TemplateParseError(
            f"YAML syntax error: {e}",
            line_number=line_number,
            parse_error=e,
        ) from e

    if not isinstance(data, dict):
        raise TemplateParseError(
            f"Template must be an object (dict), got {type(data).__name__}"
        )
    return data


def _trigger_block(data: dict[str, Any]) -> Any:
    # YAML 1.1 loads a bare ``on`` key as boolean True
    if "on" in data:
        return data["on"]
    return data.get(True)


def extract_inputs(data: dict[str, Any]) -> dict[str, Any]:
    """Return the raw input declarations from a parsed template document.

    Args:
        data: Parsed YAML document.

    Returns:
        Mapping of parameter name to its raw declaration. Empty if the
        document declares no inputs.

    Raises:
        TemplateParseError: If the inputs block is present but malformed.
    """
    if "inputs" in data:
        inputs = data["inputs"]
    else:
        trigger = _trigger_block(data)
        if isinstance(trigger, dict) and "workflow_call" in trigger:
            call = trigger["workflow_call"] or {}
            if not isinstance(call, dict):
                raise TemplateParseError("'workflow_call' must be a mapping")
            inputs = call.get("inputs")
        else:
            inputs = None

    if inputs is None:
        return {}
    if not isinstance(inputs, dict):
        raise TemplateParseError(
            f"'inputs' must be a mapping, got {type(inputs).__name__}"
        )
    return inputs


def _parameter_entry(name: Any, raw: Any) -> dict[str, Any]:
    if not isinstance(name, str):
        raise TemplateParseError(f"Input name must be a string, got {name!r}")
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TemplateParseError(f"Input '{name}' must be a mapping")
    unknown = sorted(str(key) for key in raw if key not in _PARAMETER_KEYS)
    if unknown:
        raise TemplateParseError(
            f"Input '{name}' has unsupported keys: {', '.join(unknown)}"
        )
    required = raw.get("required", False)
    if not isinstance(required, bool):
        raise TemplateParseError(
            f"'required' of input '{name}' must be true or false, got {required!r}"
        )
    entry: dict[str, Any] = {
        "name": name,
        "type": raw.get("type", "string"),
        "required": required,
        "default": raw.get("default"),
        "description": raw.get("description") or "",
    }
    if "options" in raw:
        options = raw["options"]
        if not isinstance(options, list):
            raise TemplateParseError(f"Options of input '{name}' must be a list")
        entry["options"] = tuple(str(option) for option in options)
    return entry


def parse_template(
    yaml_content: str,
    source_name: str | None = None,
) -> WorkflowTemplate:
    """Parse template YAML into a WorkflowTemplate.

    Args:
        yaml_content: YAML text in the native or reusable-workflow layout.
        source_name: Fallback template name (usually the file stem) used
            when the document carries no ``name``.

    Returns:
        Validated WorkflowTemplate.

    Raises:
        TemplateParseError: If the document cannot be parsed or validated.
    """
    data = parse_yaml(yaml_content)

    name = data.get("name") or source_name
    if not isinstance(name, str) or not name.strip():
        raise TemplateParseError("Template has no name")
    description = data.get("description") or ""
    if not isinstance(description, str):
        raise TemplateParseError(f"Description of template '{name}' must be a string")

    raw_inputs = extract_inputs(data)
    entries = [_parameter_entry(key, value) for key, value in raw_inputs.items()]

    try:
        template = WorkflowTemplate.build(name, entries, description=description)
    except TemplateDefinitionError as e:
        raise TemplateParseError(e.message, parse_error=e) from e

    logger.debug(
        "template_parsed", template=template.name, parameters=len(template.parameters)
    )
    return template


def load_template(path: Path) -> WorkflowTemplate:
    """Read and parse a template file.

    Args:
        path: Path to a ``.yaml``/``.yml`` template file.

    Returns:
        Validated WorkflowTemplate named after the document or the file stem.

    Raises:
        TemplateParseError: If the file cannot be read or parsed. The error
            carries ``file_path``.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateParseError(
            f"Cannot read template file: {e}", file_path=str(path), parse_error=e
        ) from e

    try:
        return parse_template(content, source_name=path.stem)
    except TemplateParseError as e:
        e.file_path = str(path)
        raise
