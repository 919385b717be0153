"""Application configuration powered by Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Strongly typed application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: Literal["dev", "staging", "prod"] = Field(default="dev")
    project_name: str = Field(default="Delayed Jobs Health API")
    version: str = Field(default="0.1.0")

    jobs_db_url: str = Field(default="sqlite+aiosqlite:///./data/jobs.db")

    api_prefix: str = Field(default="")
    cors_allowed_origins: list[str] = Field(default_factory=list)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @field_validator("api_prefix")
    @classmethod
    def _normalize_api_prefix(cls, value: str) -> str:
        value = value.strip("/")
        return f"/{value}" if value else ""


@lru_cache
def get_settings() -> AppSettings:
    """Provide a cached singleton settings instance."""

    return AppSettings()
