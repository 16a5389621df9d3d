"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MEALBROWSER__API__BASE_URL=https://...)
  2. mealbrowser.yaml       (searched in cwd, then ~/.config/mealbrowser/)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"

# Sentinel for LoggingSettings.file: write to stderr instead of a file
STDERR = "-"


def default_log_file() -> str:
    """Platform log location, e.g. ~/.local/state/mealbrowser/log/mealbrowser.log on Linux."""
    return str(platformdirs.user_log_path("mealbrowser") / "mealbrowser.log")


def _find_config_file() -> str | None:
    """Return the path of the first mealbrowser.yaml found, or None."""
    candidates = [
        Path("mealbrowser.yaml"),
        Path.home() / ".config" / "mealbrowser" / "mealbrowser.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ApiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must use http or https scheme")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return v


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"
    # stderr is shared with the terminal UI, so logs go to a file unless file="-"
    file: str = Field(default_factory=default_log_file)


class UiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = "Recipe Collection"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MEALBROWSER__LOGGING__LEVEL=DEBUG
        env_prefix="MEALBROWSER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    ui: UiSettings = UiSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
