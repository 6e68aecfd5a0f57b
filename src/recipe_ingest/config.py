"""
Recipe Ingest - Configuration and settings.

Everything is read from the environment (or a local .env file).
Credentials are optional at load time; the components that need them
raise ConfigurationError when they are missing.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    recipe_ingest_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Fetch strategies
    http_timeout_seconds: float = 30.0
    browser_timeout_seconds: float = 20.0
    browser_settle_seconds: float = 1.0
    # Only one fallback tier runs after the direct HTTP fetch
    fallback_strategy: Literal["firecrawl", "browser", "none"] = "firecrawl"

    # Firecrawl
    firecrawl_api_key: str | None = None
    firecrawl_api_url: str = "https://api.firecrawl.dev"
    firecrawl_timeout_seconds: float = 60.0

    # Supabase
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    recipe_requests_table: str = "recipe_requests"
    recipes_table: str = "recipes"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
