"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from dnd_party.core.config import (
    PortraitSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_party.core.exceptions import ConfigurationError


class TestStorageSettings:
    """Tests for StorageSettings configuration."""

    def test_default_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default storage backend and path."""
        monkeypatch.chdir(tmp_path)

        settings = StorageSettings()

        assert settings.backend == "sqlite"
        assert settings.database_path == Path("data/characters.db")

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test backend and path come from the environment."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DND_PARTY_BACKEND", "memory")
        monkeypatch.setenv("DND_PARTY_DATABASE_PATH", str(tmp_path / "party.db"))

        settings = StorageSettings()

        assert settings.backend == "memory"
        assert settings.database_path == tmp_path / "party.db"

    def test_unknown_backend_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an unsupported backend fails validation."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError):
            StorageSettings(backend="postgres")


class TestPortraitSettings:
    """Tests for PortraitSettings configuration."""

    def test_default_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default portrait settings."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DND_PARTY_PORTRAIT_API_KEY", raising=False)

        settings = PortraitSettings()

        assert settings.api_key is None
        assert settings.model == "dall-e-3"
        assert settings.size == "1024x1024"
        assert settings.max_retries == 3

    def test_api_key_is_secret(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the API key is not exposed by repr."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DND_PARTY_PORTRAIT_API_KEY", "sk-very-secret")

        settings = PortraitSettings()

        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "sk-very-secret"
        assert "sk-very-secret" not in repr(settings)

    def test_max_retries_bounds(self) -> None:
        """Test max_retries is bounded."""
        with pytest.raises(ValueError):
            PortraitSettings(max_retries=11)


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "dnd-party"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.json_logs is False

    def test_env_override(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        mock_env_vars: dict[str, str],
    ) -> None:
        """Test environment variables reach every settings domain."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "DEBUG"
        assert settings.storage.backend == "memory"
        assert settings.portrait.model == "dall-e-2"

    def test_invalid_log_level(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test invalid log level raises error."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError):
            Settings(log_level="INVALID")


class TestGetSettings:
    """Tests for get_settings singleton."""

    def test_caching(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)
        clear_settings_cache()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_clear_cache(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test clearing the cache reloads settings."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_environment_wrapped(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test invalid environment surfaces as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DND_PARTY_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert "Failed to load application settings" in str(exc_info.value)
