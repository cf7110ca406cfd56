"""Tests for settings."""

import pytest

from swapdesk.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.recall_environment == "sandbox"
        assert settings.balance_stale_seconds == 15.0
        assert settings.default_trade_reason == "TRADE"
        assert settings.block_unresolved_tokens is False

    def test_recall_base_urls(self):
        settings = Settings(_env_file=None)

        assert settings.get_recall_base_url("sandbox") == "https://api.sandbox.competitions.recall.network"
        assert settings.get_recall_base_url("COMPETITIONS") == "https://api.competitions.recall.network"

    def test_recall_base_url_uses_configured_environment(self):
        settings = Settings(_env_file=None, recall_environment="competitions")

        assert settings.get_recall_base_url() == settings.recall_competitions_url

    def test_unknown_environment(self):
        with pytest.raises(ValueError, match="Unknown environment: mainnet"):
            Settings(_env_file=None).get_recall_base_url("mainnet")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BLOCK_UNRESOLVED_TOKENS", "true")
        monkeypatch.setenv("BALANCE_STALE_SECONDS", "30")

        settings = Settings(_env_file=None)

        assert settings.block_unresolved_tokens is True
        assert settings.balance_stale_seconds == 30.0

    def test_is_production(self):
        assert Settings(_env_file=None, environment="Production").is_production
        assert not Settings(_env_file=None, environment="test").is_production

    def test_safe_dict_redacts_secrets(self):
        settings = Settings(_env_file=None, recall_api_key="secret", telegram_bot_token="123:abc")

        safe = settings.get_safe_dict()

        assert "secret" not in str(safe)
        assert "123:abc" not in str(safe)
        assert safe["recall"]["api_key"] == "***"

    def test_has_telegram(self):
        assert not Settings(_env_file=None, telegram_bot_token="").has_telegram
        assert Settings(_env_file=None, telegram_bot_token="t", telegram_chat_id=1).has_telegram
