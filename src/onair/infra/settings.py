"""
Application settings for OnAir.

This module defines all configuration settings for OnAir using Pydantic BaseSettings.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    # Database settings
    database_url: str = Field(default="sqlite:///./onair.db", alias="DATABASE_URL")
    echo_sql: bool = Field(default=False, alias="ECHO_SQL")
    pool_timeout: int = Field(default=30, alias="DB_POOL_TIMEOUT")
    connect_timeout: int = Field(default=10, alias="DB_CONNECT_TIMEOUT")

    # Playlist engine
    segment_duration_ms: int = Field(default=2000, gt=0, alias="SEGMENT_DURATION_MS")
    window_size: int = Field(default=10, gt=0, alias="PLAYLIST_WINDOW_SIZE")
    # Schedule stamps are stored shifted by this many hours from UTC
    schedule_offset_hours: float = Field(default=9, alias="SCHEDULE_OFFSET_HOURS")
    daterange_id_prefix: str = Field(default="arema", alias="DATERANGE_ID_PREFIX")

    # Serving
    streams_dir: str = Field(default="", alias="STREAMS_DIR")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    env: str = Field(default="dev", alias="ENV")  # dev|prod|test

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("ONAIR_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)

    # 3) Walk up from this file to find nearest .env
    here = Path(__file__).resolve()
    for parent in here.parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)
    return None


# Global settings instance (load from best-effort .env discovery)
_env_file = _resolve_env_file()
settings = Settings(_env_file=_env_file) if _env_file else Settings()  # type: ignore[call-arg]
