"""
Application configuration using Pydantic Settings.

Values are read once at the composition root and handed to services
explicitly; services never call get_settings() themselves.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = False

    # ===========================================
    # Storage (local key-value store)
    # ===========================================
    DATABASE_URL: str = "sqlite:///./rhythm.db"
    STORAGE_KEY_PREFIX: str = "rhythm_"

    # IANA timezone name. Empty = use the wall clock of the instant itself.
    TIMEZONE: str = ""

    # ===========================================
    # Rollover
    # ===========================================
    TICK_INTERVAL_SECONDS: int = Field(60, ge=1)
    ARCHIVE_TICK_INTERVAL_MINUTES: int = Field(60, ge=1)
    COMPLETED_ARCHIVE_LIMIT: int = Field(100, ge=1)
    HABIT_HISTORY_DAYS: int = Field(7, ge=1)
    WEEKLY_REFLECTION_PROMPT: bool = False

    # ===========================================
    # Schedule grid
    # ===========================================
    GRID_START_HOUR: int = Field(9, ge=0, le=23)
    GRID_VISIBLE_HOURS: int = Field(8, ge=1, le=24)
    HOUR_HEIGHT_PX: float = Field(64.0, gt=0)
    GRID_TOP_PADDING_PX: float = Field(6.0, ge=0)
    SNAP_INCREMENT_MINUTES: int = Field(15, ge=5, le=60)

    @property
    def is_test(self) -> bool:
        """Check if running under the test environment."""
        return self.ENVIRONMENT == "test"

    @property
    def timezone_name(self) -> str | None:
        return self.TIMEZONE or None


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
