"""Unit tests for configuration loading.

Covers defaults, the project/user YAML files, CIMERGE_* environment
variables, and ConfigError reporting.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from cimerge.config import (
    CimergeConfig,
    OutputConfig,
    TemplatesConfig,
    get_user_config_path,
    load_config,
)
from cimerge.exceptions import ConfigError


@pytest.mark.usefixtures("temp_dir", "clean_env")
class TestLoadConfig:
    def test_defaults_without_files(self) -> None:
        config = load_config()

        assert config.templates == TemplatesConfig()
        assert config.templates.project_dir == Path(".cimerge/templates")
        assert config.templates.include_builtin is True
        assert config.output == OutputConfig()
        assert config.output.format == "text"
        assert config.output.caller_job_id == "ci"
        assert config.default_preset is None
        assert config.verbosity == "warning"

    def test_project_file(self, temp_dir: Path) -> None:
        (temp_dir / "cimerge.yaml").write_text(
            "output:\n  format: json\ndefault_preset: Full\n"
        )

        config = load_config()

        assert config.output.format == "json"
        assert config.default_preset == "full"

    def test_explicit_config_path(self, temp_dir: Path) -> None:
        custom = temp_dir / "ci" / "settings.yaml"
        custom.parent.mkdir()
        custom.write_text("templates:\n  include_builtin: false\n")
        (temp_dir / "cimerge.yaml").write_text("templates:\n  include_builtin: true\n")

        config = load_config(custom)

        assert config.templates.include_builtin is False

    def test_user_file_below_project_file(self, temp_dir: Path) -> None:
        user_config = get_user_config_path()
        user_config.parent.mkdir(parents=True)
        user_config.write_text("output:\n  caller_job_id: lint\nverbosity: info\n")
        (temp_dir / "cimerge.yaml").write_text("verbosity: debug\n")

        config = load_config()

        assert config.output.caller_job_id == "lint"
        assert config.verbosity == "debug"

    def test_environment_overrides_files(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (temp_dir / "cimerge.yaml").write_text("output:\n  format: json\n")
        monkeypatch.setenv("CIMERGE_OUTPUT__FORMAT", "env")
        monkeypatch.setenv("CIMERGE_DEFAULT_PRESET", "minimal")

        config = load_config()

        assert config.output.format == "env"
        assert config.default_preset == "minimal"

    def test_blank_preset_normalized_to_none(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CIMERGE_DEFAULT_PRESET", "  ")

        assert load_config().default_preset is None

    def test_empty_file_uses_defaults(self, temp_dir: Path) -> None:
        (temp_dir / "cimerge.yaml").write_text("")

        assert load_config().output.format == "text"

    def test_invalid_value_raises_config_error(self, temp_dir: Path) -> None:
        (temp_dir / "cimerge.yaml").write_text("output:\n  format: xml\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config()

        assert exc_info.value.field == "output.format"
        assert exc_info.value.value == "xml"

    def test_invalid_yaml_raises_config_error(self, temp_dir: Path) -> None:
        (temp_dir / "cimerge.yaml").write_text("output: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config()

    def test_non_mapping_file_raises_config_error(self, temp_dir: Path) -> None:
        (temp_dir / "cimerge.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config()

    def test_config_path_not_retained(self, temp_dir: Path) -> None:
        custom = temp_dir / "other.yaml"
        custom.write_text("verbosity: error\n")

        load_config(custom)

        assert load_config().verbosity == "warning"
        assert CimergeConfig().verbosity == "warning"

    def test_config_path_not_retained_after_error(self, temp_dir: Path) -> None:
        custom = temp_dir / "broken.yaml"
        custom.write_text("verbosity: loud\n")

        with pytest.raises(ConfigError):
            load_config(custom)

        assert load_config().verbosity == "warning"

    def test_concurrent_loads_keep_their_own_file(self, temp_dir: Path) -> None:
        paths = {}
        for level in ("error", "debug"):
            path = temp_dir / f"{level}.yaml"
            path.write_text(f"verbosity: {level}\n")
            paths[level] = path
        levels = ["error", "debug"] * 50

        with ThreadPoolExecutor(max_workers=8) as pool:
            loaded = list(
                pool.map(lambda level: load_config(paths[level]).verbosity, levels)
            )

        assert loaded == levels


def test_user_config_path_under_home(isolated_home: Path) -> None:
    assert get_user_config_path() == isolated_home / ".config" / "cimerge" / "config.yaml"
