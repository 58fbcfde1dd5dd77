"""
Engine Configuration

All settings loaded from environment variables (prefix ``TA_ENGINE_``).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from ta_engine.schemas.analysis import EngineVersion


class EngineSettings(BaseSettings):
    """Engine settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TA_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Indicator set used when the caller does not pick one
    default_engine_version: EngineVersion = EngineVersion.V1


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
