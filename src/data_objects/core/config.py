"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.

Precedence, highest first: explicit overrides, environment variables,
TOML file, field defaults.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
)

from .errors import ConfigError

# TOML data for the Settings() call currently being built by load_settings()
_toml_data: ContextVar[dict[str, Any]] = ContextVar("toml_data", default={})


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# TOML source
# ---------------------------------------------------------------------------

class TomlDataSource(PydanticBaseSettingsSource):
    """Settings source fed from an already parsed TOML document."""

    def __init__(
        self, settings_cls: type[BaseSettings], data: dict[str, Any]
    ) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: value
            for name, value in self._data.items()
            if name in self.settings_cls.model_fields
        }


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    # Re-run the validating constructor over a derived clone
    revalidate_on_derive: bool = True

    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "DATA_OBJECTS_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            TomlDataSource(settings_cls, _toml_data.get()),
        )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Environment variables win over the file; ``overrides`` win over both.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: If ``config_path`` is given but does not exist.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

    token = _toml_data.set(data)
    try:
        return Settings(**(overrides or {}))
    finally:
        _toml_data.reset(token)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading defaults on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Settings | None) -> None:
    """Replace the process-wide settings.  ``None`` resets to defaults."""
    global _settings
    _settings = settings
