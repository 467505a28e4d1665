"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import make_url


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8080, description="Application port")
    api_prefix: str = Field(default="/v1", description="Prefix for versioned routes")


class ServerConfig(BaseModel):
    """Transport-level deadlines handed to uvicorn."""

    timeout_keep_alive: int = Field(
        default=120, description="Idle keep-alive timeout in seconds"
    )
    timeout_graceful_shutdown: int | None = Field(
        default=10, description="Seconds to wait for in-flight requests on shutdown"
    )
    limit_concurrency: int | None = Field(
        default=None, description="Maximum concurrent connections before 503"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./database/data/books.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    lock_timeout: int = Field(
        default=20, description="SQLite busy timeout in seconds"
    )
    migrations_path: str = Field(
        default="migrations", description="Directory holding the .sql migrations"
    )
    apply_migrations_on_startup: bool = Field(
        default=True, description="Apply pending migrations when the app starts"
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return make_url(self.url).get_backend_name() == "sqlite"

    @computed_field
    @property
    def connection_string(self) -> str:
        """Render the URL with its password so the engine can use it."""
        return make_url(self.url).render_as_string(hide_password=False)


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    server: ServerConfig = Field(
        default_factory=ServerConfig, description="HTTP server configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
