"""Wordbox Configuration - environment-driven settings."""

import secrets
from functools import cached_property, lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Wordbox"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, validation_alias="WORDBOX_DEBUG")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["structured", "dev"] = "dev"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8000, gt=0, lt=65536)

    # JWT
    jwt_secret_key: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_token_expire_minutes: int = Field(default=60, gt=0)

    # Credential store backend
    credential_store: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./wordbox.db"

    # Upstream dictionary APIs
    deepl_key: str = ""
    deepl_api_url: str = "https://api-free.deepl.com"
    mw_dictionary_key: str = ""
    mw_thesaurus_key: str = ""
    http_timeout: float = Field(default=15.0, gt=0)

    @cached_property
    def effective_jwt_secret_key(self) -> str:
        """Signing key for tokens.

        Falls back to a random per-process key when JWT_SECRET_KEY is unset,
        which invalidates every issued token on restart.
        """
        if self.jwt_secret_key:
            return self.jwt_secret_key
        return secrets.token_hex(32)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache application settings."""
    return Settings()


settings = get_settings()
