"""Configuration management for dnd-party.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files and runtime overrides. API keys are held as
SecretStr.

Example:
    >>> from dnd_party.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.backend
    'sqlite'

Environment Variables:
    DND_PARTY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_PARTY_JSON_LOGS: Emit JSON log lines
    DND_PARTY_BACKEND: Character store backend ('memory' or 'sqlite')
    DND_PARTY_DATABASE_PATH: Path to the SQLite character database
    DND_PARTY_PORTRAIT_API_KEY: API key for the image generation service
    DND_PARTY_PORTRAIT_MODEL: Image model identifier
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_party.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the character store.

    Attributes:
        backend: Which repository implementation to use.
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_PARTY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["memory", "sqlite"] = Field(
        default="sqlite",
        description="Character store backend",
    )
    database_path: Path = Field(
        default=Path("data/characters.db"),
        description="Path to SQLite character database",
    )


class PortraitSettings(BaseSettings):
    """Configuration for the portrait image service.

    Attributes:
        api_key: API key for the image service.
        base_url: Optional alternative endpoint for an OpenAI-compatible API.
        model: Image model identifier.
        size: Requested image dimensions.
        max_retries: Attempts for transient failures.
        timeout_seconds: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_PARTY_PORTRAIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="Image service API key",
    )
    base_url: str | None = Field(
        default=None,
        description="Alternative OpenAI-compatible endpoint",
    )
    model: str = Field(
        default="dall-e-3",
        description="Image model",
    )
    size: Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"] = Field(
        default="1024x1024",
        description="Generated image size",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum attempts for transient failures",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=300,
        description="Request timeout",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON logs instead of console output.
        storage: Character store settings.
        portrait: Portrait image service settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_PARTY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="dnd-party",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    portrait: PortraitSettings = Field(default_factory=PortraitSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "PortraitSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
