"""Unit tests for presets."""

from __future__ import annotations

from pathlib import Path

import pytest

from cimerge.discovery import TemplateDiscovery
from cimerge.exceptions import PresetNotFoundError
from cimerge.presets import PRESETS, apply_preset, get_preset, preset_names
from cimerge.resolver import resolve
from cimerge.templates import WorkflowTemplate


@pytest.fixture
def builtin_templates(tmp_path: Path) -> dict[str, WorkflowTemplate]:
    result = TemplateDiscovery(tmp_path / "project", tmp_path / "user").discover()
    return {t.name: t.template for t in result.templates}


def test_preset_names() -> None:
    assert preset_names() == ("minimal", "recommended", "full")


def test_get_preset_unknown() -> None:
    with pytest.raises(PresetNotFoundError) as exc_info:
        get_preset("huge")

    assert exc_info.value.available == ("minimal", "recommended", "full")


def test_presets_are_read_only() -> None:
    with pytest.raises(TypeError):
        PRESETS["custom"] = {}  # type: ignore[index]


@pytest.mark.parametrize("preset", ["minimal", "recommended", "full"])
def test_every_preset_resolves_against_builtins(
    preset: str, builtin_templates: dict[str, WorkflowTemplate]
) -> None:
    for template in builtin_templates.values():
        request = {name: "pkg" for name in template.required_names}

        resolved = resolve(template, apply_preset(preset, template, request))

        assert set(resolved) == set(template.parameter_names)


def test_preset_values_applied(builtin_templates: dict[str, WorkflowTemplate]) -> None:
    template = builtin_templates["python-ci"]

    resolved = resolve(
        template, apply_preset("full", template, {"package-name": "foo"})
    )

    assert resolved["coverage-threshold"] == 90
    assert resolved["python-versions"] == '["3.10", "3.11", "3.12", "3.13"]'
    assert "coverage-threshold" in resolved.supplied


def test_caller_request_wins_over_preset() -> None:
    template = WorkflowTemplate.build(
        "python-ci",
        [
            {"name": "package-name", "type": "string", "required": True},
            {"name": "coverage-threshold", "type": "number", "default": 80},
        ],
    )

    request = apply_preset(
        "full", template, {"package-name": "foo", "coverage-threshold": 50}
    )

    assert request == {"package-name": "foo", "coverage-threshold": 50}


def test_undeclared_preset_values_dropped() -> None:
    template = WorkflowTemplate.build(
        "python-ci", [{"name": "coverage-threshold", "type": "number"}]
    )

    request = apply_preset("full", template)

    assert request == {"coverage-threshold": 90}
    resolve(template, request)


def test_template_without_preset_entry(lint_template: WorkflowTemplate) -> None:
    request = {"package-name": "foo"}

    assert apply_preset("full", lint_template, request) == request


def test_apply_does_not_mutate_request(lint_template: WorkflowTemplate) -> None:
    request = {"package-name": "foo"}

    merged = apply_preset("minimal", lint_template, request)
    merged["extra"] = 1

    assert request == {"package-name": "foo"}
