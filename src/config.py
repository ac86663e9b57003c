"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Call Tree Dashboard"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Database (Turso / libSQL)
    turso_database_url: str | None = Field(default=None)
    turso_auth_token: str | None = Field(default=None)

    # Dashboard refresh and data loading
    refresh_interval_seconds: int = Field(
        default=60,
        ge=1,
        description="Seconds between background dashboard refreshes",
    )
    page_size: int = Field(
        default=1000,
        ge=1,
        description="Rows fetched per page when loading contacts and responses",
    )
    default_lookback_hours: int = Field(
        default=24,
        ge=1,
        description="Live window size when no incident is active",
    )

    # Manual entries
    manual_entry_country_code: str = Field(
        default="63",
        description="Country code prefixed to manually entered sender numbers",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
