"""
Configuration settings for the student records manager.

Uses Pydantic Settings to load environment variables for the data file location,
logging, and background save behaviour.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    data_file: Path = Field(Path("students.json"), alias="STUDENTS_DATA_FILE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Background saves
    save_timeout_seconds: float = Field(5.0, gt=0, alias="SAVE_TIMEOUT_SECONDS")
    save_retry_attempts: int = Field(3, ge=1, alias="SAVE_RETRY_ATTEMPTS")
    save_retry_wait_seconds: float = Field(0.1, ge=0, alias="SAVE_RETRY_WAIT_SECONDS")
    save_fsync: bool = Field(True, alias="SAVE_FSYNC")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
