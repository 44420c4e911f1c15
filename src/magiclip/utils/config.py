"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults loaded from ``MAGICLIP_*`` environment variables.

    Attributes:
        max_workers: Size of the per-file worker pool
        lead_padding_seconds: Default time added before each matched cue
        trail_padding_seconds: Default time added after each matched cue
        case_sensitive: Default case sensitivity for patterns
        log_level: Minimum log level ("DEBUG", "INFO", ...)
        log_json: Render logs as JSON lines instead of console output
    """

    max_workers: int = Field(default=4, ge=1)

    lead_padding_seconds: float = 0.0
    trail_padding_seconds: float = 0.0
    case_sensitive: bool = False

    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MAGICLIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment

    Note:
        Settings are cached for performance. Use get_settings.cache_clear()
        to reload settings in tests.
    """
    return Settings()
