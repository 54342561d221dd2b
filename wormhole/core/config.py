"""Settings read from the environment (and an optional .env file)."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    SUPABASE_URL and SUPABASE_ANON_KEY have no defaults: constructing
    Settings without them raises pydantic.ValidationError, which stops the
    app at import time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="wormhole", description="Name used in logs and the API title")
    app_env: str = Field(default="development", description="development, staging or production")
    debug: bool = Field(default=False, description="Serve /docs and reload on change")
    log_level: str = Field(default="INFO", description="Root logger level")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated browser origins allowed to call the API",
    )

    supabase_url: str = Field(..., min_length=1, description="Supabase project URL")
    supabase_anon_key: str = Field(..., min_length=1, description="Supabase public (anon) API key")

    # The profile row is written by a trigger after sign-up; poll for it
    signup_profile_poll_attempts: int = Field(default=5, ge=1, description="Profile lookups before giving up")
    signup_profile_poll_min_wait: float = Field(default=0.1, ge=0, description="First backoff delay (s)")
    signup_profile_poll_max_wait: float = Field(default=2.0, ge=0, description="Largest backoff delay (s)")

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Settings singleton; get_settings.cache_clear() forces a re-read."""
    return Settings()
