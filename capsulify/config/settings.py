"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

import logging
import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    database_url: str = Field(default="sqlite:///./data/capsulify.db")
    db_schema: str = Field(default="capsulify_live")
    log_level: str = Field(default="INFO")

    @field_validator("db_schema")
    @classmethod
    def validate_schema(cls, v: str) -> str:
        """Schema name is interpolated into search_path, so keep it a bare identifier."""
        if not _IDENTIFIER.match(v):
            raise ValueError(f"db_schema must be a plain SQL identifier, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
