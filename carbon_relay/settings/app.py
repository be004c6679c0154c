"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Values only seed command-line defaults. The matching engine always
    receives an explicit MatcherConfig.
    """

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    config_path: Path | None = Field(default=None, validation_alias="RELAY_CONFIG")
    max_workers: int | None = Field(
        default=None, ge=1, le=64, validation_alias="RELAY_MAX_WORKERS"
    )
    json_logs: bool = Field(default=True, validation_alias="RELAY_JSON_LOGS")


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
