"""
Ferry Configuration
Environment driven settings for backend selection, plugin loading and logging
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ferry settings, read from FERRY_* environment variables or .env"""

    # Backend used when neither target nor backend is configured
    default_backend: str = Field(default="local", description="Fallback transport backend")

    # Transport plugins outside the in-process registry are imported as <prefix><name>
    plugin_prefix: str = Field(default="ferry_", description="Module prefix for external transport plugins")

    # Platform definitions
    platform_definitions: Optional[str] = Field(
        default=None,
        description="YAML file with family/platform definitions (bundled OS tree when unset)",
    )

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FERRY_", extra="ignore")

    @field_validator("default_backend")
    @classmethod
    def default_backend_must_be_set(cls, v):
        if not v or not v.strip():
            raise ValueError("Default backend must not be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached ferry settings"""
    return Settings()
