"""
Environment settings for the api-errors library.

Validators read their password and email limits from here, and the reporting
boundary reads how loudly to log client errors. Values come from the process
environment or a `.env` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = Field(default="api-errors", alias="PROJECT_NAME")
    environment: Literal["local", "test", "staging", "production"] = Field(
        default="local",
        alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_client_errors: bool = Field(
        default=False,
        alias="LOG_CLIENT_ERRORS",
        description="Log 4xx classified errors at WARNING instead of INFO.",
    )
    password_min_length: int = Field(
        default=8,
        alias="PASSWORD_MIN_LENGTH",
        description="Minimum password length used when callers do not pass one.",
    )
    email_max_length: int = Field(
        default=254,
        alias="EMAIL_MAX_LENGTH",
        description="Upper bound for email addresses (RFC 5321 path limit).",
    )

    @field_validator("password_min_length", "email_max_length")
    @classmethod
    def _validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must be a positive integer.")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return "INFO"
        return str(value).strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Build Settings from the environment on first use."""
    return Settings()


settings = get_settings()
