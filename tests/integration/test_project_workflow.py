"""End-to-end: a project shadows a built-in template and resolves it.

Exercises discovery precedence, project config, presets, and both output
commands through the CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from cimerge.main import cli

pytestmark = pytest.mark.usefixtures("clean_env")

PROJECT_PYTHON_CI = """\
name: python-ci
description: Company flavour of the Python CI workflow
on:
  workflow_call:
    inputs:
      package-name:
        type: string
        required: true
      coverage-threshold:
        type: number
        default: 85
      runner:
        type: choice
        options: [ubuntu-latest, self-hosted]
jobs:
  test:
    runs-on: ${{ inputs.runner }}
    steps:
      - uses: actions/checkout@v4
"""


@pytest.fixture
def project(temp_dir: Path) -> Path:
    templates = temp_dir / ".cimerge" / "templates"
    templates.mkdir(parents=True)
    (templates / "python-ci.yml").write_text(PROJECT_PYTHON_CI)
    (temp_dir / "cimerge.yaml").write_text(
        "default_preset: full\noutput:\n  caller_job_id: build\n"
    )
    return temp_dir


def test_project_template_shadows_builtin(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(
        cli, ["resolve", "python-ci", "-i", "package-name=acme", "--format", "json"]
    )

    assert result.exit_code == 0, result.output
    # run-lint only exists on the built-in template; the full preset's
    # python-versions entry is dropped for the same reason
    assert json.loads(result.output) == {
        "coverage-threshold": 90,
        "package-name": "acme",
        "runner": "ubuntu-latest",
    }


def test_preset_option_beats_default_preset(
    cli_runner: CliRunner, project: Path
) -> None:
    result = cli_runner.invoke(
        cli,
        [
            "resolve",
            "python-ci",
            "-i",
            "package-name=acme",
            "--preset",
            "recommended",
            "--format",
            "json",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["coverage-threshold"] == 85


def test_caller_for_shadowed_template(cli_runner: CliRunner, project: Path) -> None:
    result = cli_runner.invoke(
        cli,
        [
            "caller",
            "python-ci",
            "--uses",
            "acme/workflows/.github/workflows/python-ci.yml@v2",
            "-i",
            "package-name=acme",
            "-i",
            "runner=self-hosted",
        ],
    )

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output) == {
        "jobs": {
            "build": {
                "uses": "acme/workflows/.github/workflows/python-ci.yml@v2",
                "with": {
                    "coverage-threshold": 90,
                    "package-name": "acme",
                    "runner": "self-hosted",
                },
            }
        }
    }


def test_builtin_rejects_project_only_parameter(
    cli_runner: CliRunner, temp_dir: Path
) -> None:
    result = cli_runner.invoke(
        cli, ["resolve", "python-ci", "-i", "package-name=acme", "-i", "runner=x"]
    )

    assert result.exit_code == 1
    assert "Unknown parameter 'runner'" in result.output
