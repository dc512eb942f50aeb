"""Configuration management for the relay."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings read from RELAY_* environment variables or .env.

    Campaign tokens, the shared secret and CORS origins live in the YAML
    file named by ``config``, not here.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RELAY_",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5032, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    config: str = Field(default="relay.yaml", description="Path to the relay YAML file")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def config_path(self) -> Path:
        return Path(self.config).expanduser()


@lru_cache
def get_settings() -> Settings:
    return Settings()
