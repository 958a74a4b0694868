"""Tests for BotSettings validation."""

import pytest
from pydantic import ValidationError

from chatbot.core.config import BotSettings


def _settings(**kwargs):
    return BotSettings(_env_file=None, **kwargs)


class TestBotSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "DEFAULT_PREFIX", "DEFAULT_LANGUAGE", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = _settings()

        assert settings.database_url == ""
        assert settings.default_prefix == "!"
        assert settings.default_language == "en"
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_PREFIX", "#")
        monkeypatch.setenv("DEFAULT_LANGUAGE", "zh")

        settings = _settings()

        assert settings.default_prefix == "#"
        assert settings.default_language == "zh"

    def test_database_url_must_be_postgres(self):
        assert _settings(database_url="postgresql://bot@localhost/bot").database_url

        with pytest.raises(ValidationError, match="postgresql://"):
            _settings(database_url="mysql://bot@localhost/bot")

    def test_prefix_without_whitespace(self):
        with pytest.raises(ValidationError, match="whitespace"):
            _settings(default_prefix="! ")

    def test_language_must_be_known(self):
        with pytest.raises(ValidationError, match="DEFAULT_LANGUAGE"):
            _settings(default_language="fr")

    def test_log_level_is_normalized(self):
        assert _settings(log_level="debug").log_level == "DEBUG"
        assert _settings(log_level="loud").log_level == "INFO"

    def test_only_used_settings_are_declared(self, monkeypatch):
        monkeypatch.setenv("BOT_ID", "bot-1")

        settings = _settings()

        assert set(BotSettings.model_fields) == {
            "database_url",
            "default_prefix",
            "default_language",
            "log_level",
        }
        assert not hasattr(settings, "bot_id")
