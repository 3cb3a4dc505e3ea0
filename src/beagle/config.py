"""Process settings for the endpoint registry.

Values are read from ``BEAGLE_*`` environment variables (or a local ``.env``
file). SQLite is the default backend; any SQLAlchemy URL is accepted.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pydantic settings container for the storage layer."""

    model_config = SettingsConfigDict(
        env_prefix="BEAGLE_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///beagle.db",
        min_length=1,
        description="SQLAlchemy URL of the registry database.",
    )
    sql_echo: bool = Field(
        default=False,
        description="Forward every statement to the sqlalchemy.engine logger.",
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Test pooled connections for liveness before handing them out.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to logging.basicConfig.",
    )
    log_queries: bool = Field(
        default=False,
        description="Emit a debug event with SQL text and parameters for every compiled query.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log level '{value}'")
        return level


def load_settings(**overrides: object) -> Settings:
    """Return settings from the environment, with explicit ``overrides`` applied."""

    return Settings(**overrides)


__all__ = ["Settings", "load_settings"]
