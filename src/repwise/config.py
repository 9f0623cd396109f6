"""Configuration settings for repwise."""

import calendar
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# src/repwise/config.py -> project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from REPWISE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPWISE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = PROJECT_ROOT / "data"
    db_filename: str = "repwise.db"
    default_user: str = "default"

    # Progress rules
    history_cap: int = Field(default=100, ge=1)
    weekly_target: int = Field(default=4, ge=1)
    monthly_target: int = Field(default=16, ge=1)
    week_start: Literal["monday", "sunday"] = "monday"

    # Logging
    log_level: str = "INFO"

    # Local web server
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def first_weekday(self) -> int:
        """The week anchor as a calendar weekday constant."""
        return calendar.SUNDAY if self.week_start == "sunday" else calendar.MONDAY


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
