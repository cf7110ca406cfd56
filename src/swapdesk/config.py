"""Application configuration using pydantic-settings.

All settings can be supplied through environment variables or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Recall trading API
    # ======================
    recall_api_key: str = Field(default="", description="Recall agent API key")
    recall_environment: str = Field(
        default="sandbox", description="Recall environment: sandbox or competitions"
    )
    recall_sandbox_url: str = Field(
        default="https://api.sandbox.competitions.recall.network",
        description="Recall sandbox base URL",
    )
    recall_competitions_url: str = Field(
        default="https://api.competitions.recall.network",
        description="Recall competitions base URL",
    )
    recall_competition_id: Optional[str] = Field(
        default=None, description="Competition ID sent with balance and trade requests"
    )

    # ======================
    # Market data
    # ======================
    geckoterminal_api_url: str = Field(
        default="https://api.geckoterminal.com/api/v2", description="GeckoTerminal API URL"
    )
    coingecko_api_url: str = Field(
        default="https://api.coingecko.com/api/v3", description="CoinGecko API URL"
    )
    http_timeout: float = Field(default=30.0, description="HTTP client timeout in seconds")

    # ======================
    # Trading
    # ======================
    balance_stale_seconds: float = Field(
        default=15.0, description="How long a fetched balance snapshot is reused"
    )
    default_trade_reason: str = Field(default="TRADE", description="Reason sent when none given")
    block_unresolved_tokens: bool = Field(
        default=False,
        description="Fail trades whose token symbol could not be resolved to an address",
    )

    # ======================
    # Telegram notifications
    # ======================
    telegram_bot_token: str = Field(default="", description="Telegram bot token from BotFather")
    telegram_chat_id: Optional[int] = Field(
        default=None, description="Chat that receives trade notifications"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_telegram(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    def get_recall_base_url(self, env: Optional[str] = None) -> str:
        """Get the Recall base URL for an environment.

        Raises:
            ValueError: If the environment is not known
        """
        env = (env or self.recall_environment).lower()
        url_map = {
            "sandbox": self.recall_sandbox_url,
            "competitions": self.recall_competitions_url,
        }
        url = url_map.get(env)
        if not url:
            raise ValueError(f"Unknown environment: {env}")
        return url

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "recall": {
                "environment": self.recall_environment,
                "api_key": "***" if self.recall_api_key else "(not set)",
                "competition_id": self.recall_competition_id or "(none)",
            },
            "market_data": {
                "geckoterminal": self.geckoterminal_api_url,
                "coingecko": self.coingecko_api_url,
            },
            "trading": {
                "balance_stale_seconds": self.balance_stale_seconds,
                "block_unresolved_tokens": self.block_unresolved_tokens,
            },
            "telegram_bot_token": "***" if self.telegram_bot_token else "(not set)",
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
