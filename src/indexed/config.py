"""
Configuration for indexed.

Uses Pydantic Settings for type-safe environment variable loading.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from indexed.exceptions import ConfigurationError

load_dotenv()

# Ceilings from the sitemaps.org protocol
MAX_ITEMS = 50000
MAX_SIZE = 10485760
MAX_IMAGES_PER_PAGE = 1000


class IndexedSettings(BaseSettings):
    """Generator settings, read from ``INDEXED_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INDEXED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Output
    debug: bool = Field(default=False, description="Pretty-print generated XML by default")

    # Limits
    max_items: int = Field(default=MAX_ITEMS, ge=1, le=MAX_ITEMS, description="Maximum entries per document")
    max_size: int = Field(default=MAX_SIZE, ge=1, le=MAX_SIZE, description="Maximum document size in bytes")
    max_images_per_page: int = Field(
        default=MAX_IMAGES_PER_PAGE,
        ge=0,
        le=MAX_IMAGES_PER_PAGE,
        description="Maximum images attached to a single page",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper


@lru_cache
def get_settings() -> IndexedSettings:
    """
    Get cached settings instance.

    Raises:
        ConfigurationError: If an ``INDEXED_*`` variable holds an invalid value.
    """
    try:
        return IndexedSettings()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid indexed settings: {e.error_count()} error(s)",
            context={"errors": e.errors(include_url=False)},
        ) from e
