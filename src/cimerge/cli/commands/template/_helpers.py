"""Shared helpers for template CLI subcommands."""

from __future__ import annotations

from cimerge.discovery import TemplateSource


def get_source_label(source: TemplateSource | str) -> str:
    """Map a template source to a human-readable label."""
    value = source.value if isinstance(source, TemplateSource) else source
    return {
        "builtin": "Built-in (packaged with cimerge)",
        "user": "User (~/.config/cimerge/templates/)",
        "project": "Project (.cimerge/templates/)",
        "file": "Direct file path",
    }.get(value, value)
