from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Uses pydantic-settings so values are type-validated and defaulted.
    Environment variables take precedence over the optional .env file.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects log rendering and destructive DB helpers."""

    DEBUG: bool = True
    """Enable debug mode: verbose logging and SQL echo."""

    APP_NAME: str = "swipematch"

    # DB
    DATABASE_URL: Optional[str] = None
    """Database connection URL. If None, uses a local SQLite file."""

    # Identity
    USER_ID_HEADER: str = "X-User-Id"
    """Header set by the upstream identity gateway with the caller's user id."""

    # Discovery feed
    FEED_PAGE_SIZE: int = 25
    """Number of candidates returned when the caller does not pass a limit."""

    FEED_MAX_PAGE_SIZE: int = 100
    """Upper bound applied to caller-supplied feed limits."""

    # Admin
    ADMIN_LIST_LIMIT: int = 500
    """Maximum rows returned by admin match/report listings."""

    UNMATCH_CLEARS_SWIPES: bool = False
    """When true, explicit and admin unmatch also delete the pair's swipes,
    letting the two users rediscover each other. Moderation unmatch never
    clears swipes."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL or "sqlite+aiosqlite:///./swipematch.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
