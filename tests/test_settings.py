"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from connected_screens.settings import Environment, Settings


class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "WS_PATH", "INITIAL_SCREEN"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.PORT == 8081
        assert settings.HOST == "0.0.0.0"
        assert settings.WS_PATH == "/"
        assert (settings.INITIAL_POSITION_X, settings.INITIAL_POSITION_Y) == (
            50.0,
            50.0,
        )
        assert settings.INITIAL_SCREEN == 0
        assert settings.MAX_SCREEN_INDEX is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("MAX_SCREEN_INDEX", "3")

        settings = Settings()

        assert settings.PORT == 9001
        assert settings.MAX_SCREEN_INDEX == 3


class TestEnvironmentDefaults:
    """Test environment specific logging defaults."""

    def test_production(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_CONSOLE_FORMAT", raising=False)

        settings = Settings(ENV=Environment.PRODUCTION)

        assert settings.LOG_LEVEL == "WARNING"
        assert settings.LOG_CONSOLE_FORMAT == "json"

    def test_dev(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_CONSOLE_FORMAT", raising=False)

        settings = Settings(ENV=Environment.DEV)

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_CONSOLE_FORMAT == "human"

    def test_explicit_log_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        settings = Settings(ENV=Environment.PRODUCTION)

        assert settings.LOG_LEVEL == "ERROR"

    def test_keyword_overrides_win(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_CONSOLE_FORMAT", raising=False)

        settings = Settings(
            ENV=Environment.DEV, LOG_LEVEL="INFO", LOG_CONSOLE_FORMAT="json"
        )

        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_CONSOLE_FORMAT == "json"

    def test_dotenv_value_wins(self, monkeypatch, tmp_path):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=ERROR\n")

        settings = Settings(ENV=Environment.DEV, _env_file=env_file)

        assert settings.LOG_LEVEL == "ERROR"


class TestSettingsValidation:
    """Test rejected configurations."""

    def test_position_bounds_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Settings(POSITION_MIN=10.0, POSITION_MAX=0.0)

    def test_initial_screen_must_be_non_negative(self):
        with pytest.raises(ValidationError):
            Settings(INITIAL_SCREEN=-1)

    def test_ws_path_must_be_absolute(self):
        with pytest.raises(ValidationError):
            Settings(WS_PATH="ws")

    def test_send_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(SEND_TIMEOUT_SECONDS=0)
