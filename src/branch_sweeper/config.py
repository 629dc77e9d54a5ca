"""Configuration management for branch-sweeper."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SweeperSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(default="WARNING", validation_alias="BRANCH_SWEEPER_LOG_LEVEL")
    policy_path: Path | None = Field(default=None, validation_alias="BRANCH_SWEEPER_POLICY")
    dry_run_notice: bool = Field(default=False, validation_alias="BRANCH_SWEEPER_DRY_RUN_NOTICE")
    require_remote: bool = Field(default=False, validation_alias="BRANCH_SWEEPER_REQUIRE_REMOTE")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "BRANCH_SWEEPER_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("policy_path", mode="before")
    @classmethod
    def _parse_policy_path(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


@lru_cache(maxsize=1)
def get_settings() -> SweeperSettings:
    """Return cached settings instance."""

    settings = SweeperSettings()
    if settings.policy_path is not None:
        settings.policy_path = settings.policy_path.expanduser().resolve()
    return settings


__all__ = ["SweeperSettings", "get_settings"]
