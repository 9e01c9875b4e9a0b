"""Tests for the top-level ``cimerge`` group."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from cimerge import __version__
from cimerge.main import cli

pytestmark = pytest.mark.usefixtures("temp_dir", "clean_env")


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"cimerge, version {__version__}" in result.output


def test_help_without_subcommand(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])

    assert result.exit_code == 0
    for command in ("resolve", "caller", "template"):
        assert command in result.output


def test_invalid_config_file(cli_runner: CliRunner, temp_dir: Path) -> None:
    (temp_dir / "cimerge.yaml").write_text("verbosity: loud\n")

    result = cli_runner.invoke(cli, ["template", "list"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "Field: verbosity" in result.output


def test_explicit_config_option(cli_runner: CliRunner, temp_dir: Path) -> None:
    config = temp_dir / "alt.yaml"
    config.write_text("output:\n  format: env\n")

    result = cli_runner.invoke(
        cli, ["-c", str(config), "resolve", "docs", "-i", "deploy=true"]
    )

    assert result.exit_code == 0
    assert "deploy=true" in result.output.splitlines()


def test_dotenv_file_feeds_settings(cli_runner: CliRunner, temp_dir: Path) -> None:
    (temp_dir / ".env").write_text("CIMERGE_OUTPUT__FORMAT=env\n")

    result = cli_runner.invoke(cli, ["resolve", "security-scan"])

    assert result.exit_code == 0
    assert "run-bandit=true" in result.output.splitlines()


def test_verbose_logs_resolution(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        cli, ["-v", "resolve", "python-ci", "-i", "package-name=foo"]
    )

    assert result.exit_code == 0
    assert "template_resolved" in result.output
