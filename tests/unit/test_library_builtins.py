"""Tests for the packaged template library."""

from __future__ import annotations

import pytest

from cimerge.library import BUILTIN_TEMPLATES, get_builtin_path
from cimerge.resolver import resolve
from cimerge.templates import ParameterType, load_template


def test_builtin_path_holds_every_template() -> None:
    stems = {path.stem for path in get_builtin_path().glob("*.yaml")}

    assert stems == BUILTIN_TEMPLATES


@pytest.mark.parametrize("name", sorted(BUILTIN_TEMPLATES))
def test_builtin_parses_and_is_named_after_file(name: str) -> None:
    template = load_template(get_builtin_path() / f"{name}.yaml")

    assert template.name == name
    assert template.description
    assert template.parameters
    assert all(spec.description for spec in template.iter_parameters())


def test_python_ci_defaults() -> None:
    template = load_template(get_builtin_path() / "python-ci.yaml")

    resolved = resolve(template, {"package-name": "foo"})

    assert resolved.to_dict() == {
        "coverage-threshold": 80,
        "package-name": "foo",
        "python-versions": '["3.11", "3.12", "3.13"]',
        "run-lint": True,
        "run-tests": True,
        "run-type-check": True,
        "working-directory": ".",
    }


def test_docs_tool_is_a_choice() -> None:
    template = load_template(get_builtin_path() / "docs.yaml")

    spec = template.parameters["docs-tool"]
    assert spec.type is ParameterType.CHOICE
    assert spec.options == ("mkdocs", "sphinx")


def test_security_scan_needs_no_input() -> None:
    template = load_template(get_builtin_path() / "security-scan.yaml")

    assert template.required_names == ()
    assert resolve(template, {})["severity-threshold"] == "medium"
