"""Configuration management for the mapper."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """SQLite connection configuration."""

    path: Path = Field(default=Path("horm.db"), description="Database file path")
    timeout_seconds: float = Field(
        default=5.0, ge=0, description="Seconds to wait on a locked database"
    )
    check_same_thread: bool = Field(
        default=True, description="Reject use of the connection from other threads"
    )

    def ensure_parent(self) -> None:
        """Ensure the database file's directory exists."""
        self.path.parent.mkdir(parents=True, exist_ok=True)


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="horm", description="Service name for tracing")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus metrics port (off if unset)"
    )


class Config(BaseSettings):
    """Main configuration for the mapper."""

    model_config = SettingsConfigDict(
        env_prefix="HORM_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
