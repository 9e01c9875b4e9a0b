"""Preset override sets: minimal, recommended, full.

Each preset maps template names to input overrides. Only values that
differ from the built-in defaults are listed; everything else keeps the
template default. Presets sit underneath caller overrides: a value the
caller supplies always wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from cimerge.exceptions import PresetNotFoundError
from cimerge.logging import get_logger
from cimerge.templates.schema import WorkflowTemplate

__all__ = [
    "PRESETS",
    "preset_names",
    "get_preset",
    "apply_preset",
]

logger = get_logger(__name__)

MINIMAL: dict[str, dict[str, Any]] = {
    "python-ci": {
        "run-type-check": False,
        "python-versions": '["3.12"]',
    },
    "security-scan": {
        "run-bandit": False,
    },
}

RECOMMENDED: dict[str, dict[str, Any]] = {
    "python-ci": {},
    "python-publish": {
        "sign-artifacts": True,
    },
    "security-scan": {},
}

FULL: dict[str, dict[str, Any]] = {
    "python-ci": {
        "python-versions": '["3.10", "3.11", "3.12", "3.13"]',
        "coverage-threshold": 90,
    },
    "python-publish": {
        "sign-artifacts": True,
    },
    "docs": {
        "deploy": True,
    },
    "security-scan": {
        "run-codeql": True,
        "severity-threshold": "low",
    },
}

PRESETS: Mapping[str, Mapping[str, dict[str, Any]]] = MappingProxyType(
    {
        "minimal": MINIMAL,
        "recommended": RECOMMENDED,
        "full": FULL,
    }
)


def preset_names() -> tuple[str, ...]:
    return tuple(PRESETS)


def get_preset(name: str) -> Mapping[str, dict[str, Any]]:
    """Return a preset by name.

    Raises:
        PresetNotFoundError: If no preset has that name.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise PresetNotFoundError(name, available=preset_names()) from None


def apply_preset(
    preset: str,
    template: WorkflowTemplate,
    request: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Layer a preset underneath a caller request.

    Preset entries for parameters the template does not declare are
    dropped, so a project template that shadows a built-in one keeps
    working with every preset.

    Args:
        preset: Preset name.
        template: Template the request targets.
        request: Caller overrides. They win over preset values.

    Returns:
        A new request mapping.

    Raises:
        PresetNotFoundError: If no preset has that name.
    """
    overrides = get_preset(preset).get(template.name, {})
    merged: dict[str, Any] = {}
    for name, value in overrides.items():
        if name in template:
            merged[name] = value
        else:
            logger.debug(
                "preset_value_dropped",
                preset=preset,
                template=template.name,
                parameter=name,
            )
    merged.update(request or {})
    return merged
