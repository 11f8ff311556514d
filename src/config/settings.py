"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Registry policy defaults (the authority may change these at runtime)
    max_identities: int = Field(default=10000, gt=0)
    creation_fee: int = Field(default=500, ge=0)
    burn_principal: str = "SP000000000000000000002Q6VF78"  # Can never become authority

    # Logical clock
    genesis_height: int = Field(default=0, ge=0)
    block_interval_seconds: float = Field(default=10.0, gt=0)  # One block per interval

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
