"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env
file as a fallback. Pydantic Settings resolves each value in this order:
  1. Environment variables (highest priority)
  2. .env file values
  3. Defaults defined here (lowest priority)

Usage:
    from account_api.config import settings
    print(settings.DATABASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the User Account API.

    Every field has a default, so the service starts with no .env at all
    (SQLite file database, INFO logging).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "User Account API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # --- Logging ---
    # Ignored when DEBUG is on (DEBUG always logs at debug level)
    LOG_LEVEL: str = "INFO"

    # --- Database ---
    # SQLite by default; point at PostgreSQL with a postgresql+asyncpg:// URL
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/users.db"

    # --- CORS ---
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000"]


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
