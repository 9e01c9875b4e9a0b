"""Output formatting utilities for the cimerge CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

__all__ = [
    "OutputFormat",
    "format_error",
    "format_warning",
    "format_json",
]


class OutputFormat(str, Enum):
    """Output formats for a resolved configuration.

    Values:
        JSON: Machine-readable JSON object.
        YAML: YAML mapping.
        ENV: ``name=value`` lines for a CI step output file.
        TEXT: Aligned human-readable listing (default).
    """

    JSON = "json"
    YAML = "yaml"
    ENV = "env"
    TEXT = "text"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error(
        ...     "Unknown parameter 'typo-field'",
        ...     details=["Template: python-ci"],
        ...     suggestion="Run 'cimerge template show python-ci'",
        ... ))
        Error: Unknown parameter 'typo-field'
          Template: python-ci
        Suggestion: Run 'cimerge template show python-ci'
    """
    lines = [f"Error: {message}"]
    if details:
        lines.extend(f"  {detail}" for detail in details)
    if suggestion:
        lines.append(f"Suggestion: {suggestion}")
    return "\n".join(lines)


def format_warning(message: str) -> str:
    return f"Warning: {message}"


def format_json(data: Any) -> str:
    """Format data as JSON with 2-space indentation."""
    return json.dumps(data, indent=2)
