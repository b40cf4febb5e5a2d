"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SKILL_APPLICATION_ID: str | None = Field(default=None)
    WEB_APP_URL: str = Field(default="https://jjgithu.github.io/sticky-notes/editor.html")
    WEB_APP_INITIAL_MODE: str = Field(default="create")
    LOADING_SCREEN_TEXT: str = Field(default="Loading Sticky Notes...")
    VERIFY_REQUEST_SIGNATURE: bool = Field(default=True)
    VERIFY_REQUEST_TIMESTAMP: bool = Field(default=True)
    REQUEST_TIMESTAMP_TOLERANCE_SECONDS: int = Field(default=150, le=150)

    STICKY_NOTES_LOG_LEVEL: str = Field(default="info")
    STICKY_NOTES_LOG_DIR: Path | None = Field(default=None)
    LOG_PSEUDONYM_SECRET: str = Field(default="sticky-notes-dev-secret")

    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_ADMIN_AUTH: bool = Field(default=True)

    DATA_DIR: Path = Field(default=Path("/data"))


settings = Settings()
config = settings  # Alias used by route modules


__all__ = ["Settings", "settings", "config"]
