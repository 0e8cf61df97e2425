"""
Settings Management with Pydantic

Provides type-safe configuration with:
- Environment variable support
- Validation of alert thresholds
- Logging setup
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class AlertConfig(BaseSettings):
    """Thresholds used by the alert rules."""
    model_config = SettingsConfigDict(
        env_prefix="ALERT_",
        extra="ignore"
    )

    # Advanced-stage share of the pipeline (percent) that counts as a bottleneck
    bottleneck_percentage: float = Field(default=40.0, ge=0.0, le=100.0)

    # Last week below previous week times this ratio counts as a decline
    volume_decline_ratio: float = Field(default=0.5, ge=0.0, le=1.0)

    # Postings open longer than this many days are stale
    stale_days_open: float = Field(default=300, ge=0)


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = "Recruitment Dashboard"
    log_level: str = "INFO"

    # JSON snapshot exported by the data pipeline
    data_file: Optional[str] = Field(default=None, alias="RECRUITMENT_DATA_FILE")

    alerts: AlertConfig = Field(default_factory=AlertConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(alerts=AlertConfig())


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str = None) -> None:
    """Install a basic stream handler at the configured level."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
