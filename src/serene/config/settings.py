"""
SERENE Application Settings

Configuration management using Pydantic Settings.
All values are loaded from environment variables with the SERENE_ prefix.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Analysis engine configuration."""

    model_config = SettingsConfigDict(env_prefix="SERENE_ANALYSIS_")

    intervention_seed: Optional[int] = Field(
        default=None,
        description="Seed for intervention selection (None = nondeterministic)",
    )
    default_language: Literal["en", "es", "pt"] = Field(
        default="en",
        description="Language for sessions started without an explicit language",
    )

    @field_validator("default_language", mode="before")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Accept language codes in any case."""
        return v.lower() if isinstance(v, str) else v


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with SERENE_ prefix.

    Usage:
        settings = get_settings()
        seed = settings.analysis.intervention_seed
    """

    model_config = SettingsConfigDict(
        env_prefix="SERENE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus metrics for analysis and stage transitions",
    )

    # Nested settings
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
