"""
Configuration module for the Warehouse Read API.

Uses Pydantic Settings to manage environment variables and configuration.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./warehouse.db",
        description="Primary database connection string (orders, order lines)"
    )
    erp_database_url: Optional[str] = Field(
        default=None,
        description="ERP database connection string (stock by warehouse). "
                    "Falls back to database_url when unset"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements emitted by SQLAlchemy"
    )

    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8000,
        gt=0,
        le=65535,
        description="API server port"
    )
    api_workers: int = Field(
        default=1,
        gt=0,
        description="Number of API worker processes"
    )
    api_prefix: str = Field(
        default="",
        description="Path prefix for resource routes (e.g. /api)"
    )
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Error Reporting
    expose_error_details: bool = Field(
        default=True,
        description="Forward underlying exception text in error envelopes"
    )
    failure_status_code: int = Field(
        default=404,
        ge=400,
        le=599,
        description="HTTP status for lookups that fail with an error"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings: Application configuration object
    """
    global _settings
    if _settings is None:
        _settings = Settings()

        # Ensure log directory exists
        if _settings.log_file:
            _settings.log_file.parent.mkdir(parents=True, exist_ok=True)

    return _settings


def reload_settings() -> Settings:
    """
    Force reload of settings (useful for testing).

    Returns:
        Settings: Fresh application configuration object
    """
    global _settings
    _settings = None
    return get_settings()
