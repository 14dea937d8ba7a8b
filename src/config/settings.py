"""Application settings using Pydantic Settings.

Centralized configuration for the strategy engine. Settings only tune
presentation and ranking; eligibility is defined entirely by the catalog.

Environment variables:
- STRATEGY_CATALOG_DIR: Directory holding catalog_v<version>.yaml files
- STRATEGY_CATALOG_VERSION: Catalog version to load (default "1")
- STRATEGY_LOG_LEVEL / STRATEGY_JSON_LOGS: Logging output
- STRATEGY_SCORING_*: Priority score weights
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScoringSettings(BaseSettings):
    """Weights for the additive priority score."""

    model_config = SettingsConfigDict(
        env_prefix="STRATEGY_SCORING_",
        extra="ignore",
    )

    high_impact_bonus: int = Field(default=30, description="Bonus for high-impact strategies")
    medium_impact_bonus: int = Field(default=20, description="Bonus for medium-impact strategies")
    low_impact_bonus: int = Field(default=10, description="Bonus for low-impact strategies")

    tier_step_bonus: int = Field(
        default=5,
        description="Points per tier index when the profile's tier is listed",
    )
    age_window_bonus: int = Field(default=15, description="Bonus when age is inside the priority window")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STRATEGY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development", description="Environment name")

    # Catalog
    catalog_dir: Optional[Path] = Field(
        default=None,
        description="Catalog directory, defaults to the bundled strategy_catalog/",
    )
    catalog_version: str = Field(default="1", description="Catalog version to load")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    json_logs: bool = Field(default=False, description="Emit JSON formatted logs")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    # Nested settings (loaded separately)
    @property
    def scoring(self) -> ScoringSettings:
        return ScoringSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Cached settings loaded from environment.
    """
    settings = Settings()
    logger.debug(
        f"Settings loaded: environment={settings.environment} "
        f"catalog_version={settings.catalog_version}"
    )
    return settings
