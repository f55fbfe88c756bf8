"""Pydantic models for parsing the config.yaml configuration file.

These models mirror the structure of config.yaml and handle validation and
type conversion of the substituted YAML data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Deployment environment"
    )
    host: str = Field(default="0.0.0.0", description="Bind host for uvicorn")
    port: int = Field(default=8000, description="Bind port for uvicorn")
    cors: CORSConfig = Field(default_factory=CORSConfig)


class StoreConfig(BaseModel):
    """DynamoDB table configuration model."""

    region: str = Field(default="us-east-1", description="AWS region of the table")
    table_name: str = Field(default="users", description="DynamoDB table name")
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint, e.g. DynamoDB Local at http://localhost:8000",
    )
    conditional_writes: bool = Field(
        default=False,
        description="Guard create/update puts with attribute_(not_)exists conditions",
    )

    @field_validator("endpoint_url", mode="before")
    @classmethod
    def _empty_endpoint_is_none(cls, value: str | None) -> str | None:
        return value or None


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path, unset for stderr only")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @field_validator("file", mode="before")
    @classmethod
    def _empty_file_is_none(cls, value: str | None) -> str | None:
        return value or None


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    store: StoreConfig = Field(
        default_factory=StoreConfig, description="Store configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
