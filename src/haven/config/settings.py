"""
Sensory Haven Application Settings

Configuration management using Pydantic Settings.
All values can be overridden with HAVEN_ prefixed environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BreathingSettings(BaseSettings):
    """Guided breathing engine configuration."""

    model_config = SettingsConfigDict(env_prefix="HAVEN_BREATHING_")

    default_pattern_id: str = Field(default="calm", description="Pattern selected at startup")
    default_session_minutes: int = Field(default=2, ge=1, le=60, description="Initial session length")
    session_minute_options: list[int] = Field(
        default=[1, 2, 3, 5, 10],
        description="Minute choices offered by the session length selector",
    )
    voice_enabled: bool = Field(default=True, description="Speak phase cues by default")
    tick_interval_seconds: float = Field(default=1.0, gt=0.0, le=10.0)
    progress_floor: float = Field(default=0.5, ge=0.0, le=1.0, description="Animation scale at rest")
    utterance_seconds: float = Field(default=1.2, gt=0.0, le=10.0, description="Simulated speech length")

    @field_validator("session_minute_options")
    @classmethod
    def validate_minute_options(cls, v: list[int]) -> list[int]:
        """Minute options must be positive and are served sorted."""
        if not v or any(minutes < 1 for minutes in v):
            raise ValueError("session_minute_options must contain positive integers")
        return sorted(set(v))


class MonitoringSettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="HAVEN_SENTRY_")

    dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN, empty disables tracking")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with HAVEN_ prefix.

    Usage:
        settings = get_settings()
        interval = settings.breathing.tick_interval_seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="HAVEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:8080"],
        description="Allowed CORS origins"
    )

    # Nested settings
    breathing: BreathingSettings = Field(default_factory=BreathingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

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
