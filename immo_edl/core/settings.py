"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")
    log_file: Optional[str] = Field(default=None, description="Rotating log file, console only when unset")

    # Legal reference data
    wear_table_version: str = Field(
        default="grille-2016-v1",
        description="Version of the vétusté grid used for new comparisons",
    )

    # Export
    enable_export: bool = Field(default=True, description="Enable result export")
    export_dir: str = Field(default="exports", description="Directory for JSON exports")

    model_config = {
        "env_prefix": "IMMO_EDL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
