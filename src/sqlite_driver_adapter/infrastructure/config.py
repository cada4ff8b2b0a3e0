"""Configuration management for the SQLite driver adapter."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = Field(default=":memory:", description="Database file path or file: URL")
    shadow_database_url: str | None = Field(
        default=None, description="Shadow database used for migrations (default in-memory)"
    )
    foreign_keys: bool = Field(default=True, description="Enforce foreign key constraints")
    adapter_name: str = Field(
        default="sqlite-driver-adapter", min_length=1, description="Adapter name reported to callers"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    max_statement_length: int = Field(
        default=500, ge=0, description="Characters of SQL text kept per log event (0 keeps all)"
    )
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(
        default="sqlite_driver_adapter", description="Service name for tracing"
    )


class Config(BaseSettings):
    """Main configuration for the SQLite driver adapter."""

    model_config = SettingsConfigDict(
        env_prefix="SQLITE_ADAPTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
