"""Tests for settings loading."""

import pytest

from spectrum.config import Settings, get_settings


class TestSettings:
    """Test the settings tree."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        """Defaults match a local Lidarr and a 30s sync."""
        monkeypatch.chdir(tmp_path)  # no stray .env
        settings = Settings()

        assert settings.app_name == "spectrum"
        assert settings.database.url.startswith("sqlite+aiosqlite")
        assert settings.lidarr.base_url == "http://localhost:8686/api/v1"
        assert settings.sync.interval_seconds == 30
        assert settings.sync.run_on_startup is True
        assert settings.lidarr.is_configured is False

    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        """Nested groups read DOUBLE_UNDERSCORE env vars."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LIDARR__API_KEY", "abc123")
        monkeypatch.setenv("LIDARR__MEDIA_ROOT", "/srv/music")
        monkeypatch.setenv("SYNC__INTERVAL_SECONDS", "120")
        monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///:memory:")

        settings = Settings()

        assert settings.lidarr.api_key == "abc123"
        assert settings.lidarr.is_configured is True
        assert settings.lidarr.media_root == "/srv/music"
        assert settings.sync.interval_seconds == 120
        assert settings.database.url == "sqlite+aiosqlite:///:memory:"

    def test_interval_must_be_positive(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        """A zero interval is rejected."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SYNC__INTERVAL_SECONDS", "0")
        with pytest.raises(ValueError):
            Settings()

    def test_get_settings_is_cached(self) -> None:
        """get_settings returns the same instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
