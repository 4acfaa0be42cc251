"""
Application settings using Pydantic.

Provides environment-based configuration loading with DASHHCL_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DASHHCL_",
        extra="ignore",
    )

    # Widget mapping document (YAML or JSON); None means search the default locations
    widget_config: str | None = None

    # Logging
    log_level: str = "WARNING"

    # Style pass threshold
    max_line_length: int = 120

    # CLI input guard (5 MB)
    max_input_bytes: int = 5 * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
