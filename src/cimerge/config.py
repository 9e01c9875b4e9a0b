from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cimerge.exceptions import ConfigError
from cimerge.logging import get_logger

__all__ = [
    "CimergeConfig",
    "TemplatesConfig",
    "OutputConfig",
    "PROJECT_CONFIG_FILENAME",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "cimerge.yaml"

# Project config file for the load_config() call in progress.
_project_config_path: ContextVar[Path | None] = ContextVar(
    "cimerge_project_config_path", default=None
)


class TemplatesConfig(BaseModel):
    """Where template discovery looks for YAML templates.

    Attributes:
        project_dir: Project templates directory, relative to cwd.
        user_dir: User templates directory (default ~/.config/cimerge/templates).
        include_builtin: Whether packaged templates are discovered.
    """

    project_dir: Path = Field(default_factory=lambda: Path(".cimerge/templates"))
    user_dir: Path | None = None
    include_builtin: bool = True


class OutputConfig(BaseModel):
    """Settings for rendering resolved configurations."""

    format: Literal["json", "yaml", "env", "text"] = "text"
    caller_job_id: str = Field(default="ci", min_length=1)


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads values from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                loaded = yaml.safe_load(yaml_file.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_file}: {e}") from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    f"Config file {yaml_file} must contain a mapping, "
                    f"got {type(loaded).__name__}"
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class CimergeConfig(BaseSettings):
    """Root configuration object containing all cimerge settings."""

    model_config = SettingsConfigDict(
        env_prefix="CIMERGE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    default_preset: str | None = None
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("default_preset")
    @classmethod
    def normalize_preset(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order the settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (CIMERGE_*)
        3. Project YAML config (./cimerge.yaml or --config path)
        4. User YAML config (~/.config/cimerge/config.yaml)
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Return the path to ~/.config/cimerge/config.yaml."""
    return Path.home() / ".config" / "cimerge" / "config.yaml"


def load_config(config_path: Path | None = None) -> CimergeConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional project config file. Defaults to ./cimerge.yaml.

    Returns:
        CimergeConfig with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_not_found", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return CimergeConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
