"""
Configuration and settings for the events backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # MongoDB. The URI is only checked when the first connection is attempted.
    mongodb_uri: Optional[str] = Field(default=None)
    mongodb_db_name: str = Field(default="devevent")
    mongodb_server_selection_timeout_ms: int = Field(default=5000)

    # Cloudinary media hosting. CLOUDINARY_URL is read by the SDK itself.
    cloudinary_cloud_name: Optional[str] = Field(default=None)
    cloudinary_api_key: Optional[str] = Field(default=None)
    cloudinary_api_secret: Optional[str] = Field(default=None)
    media_folder: str = Field(default="DevEvent")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="EVENTS_USE_IN_MEMORY_BACKENDS"
    )

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
