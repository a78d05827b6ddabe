"""
Centralized configuration management for the connect helper.

This module provides a unified configuration system with support for:
- Environment variables
- Runtime configuration
- Validation using Pydantic
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .constants import EnvironmentVariable, Limits, LogLevel, OptionName, Timeouts


class StorageConfig(BaseModel):
    """Settings store key names."""

    options_name: str = Field(
        default_factory=lambda: os.getenv(
            EnvironmentVariable.OPTIONS_NAME.value, OptionName.CREDENTIALS.value
        ),
        description="Settings key holding the credential record",
    )
    error_log_name: str = Field(
        default_factory=lambda: os.getenv(
            EnvironmentVariable.ERROR_LOG_NAME.value, OptionName.ERROR_LOG.value
        ),
        description="Settings key holding the error log",
    )


class RemoteConfig(BaseModel):
    """Remote management API configuration."""

    base_url: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.API_URL.value, ""),
        description="Base URL of the remote management API",
    )
    timeout: int = Field(
        default_factory=lambda: int(
            os.getenv(EnvironmentVariable.API_TIMEOUT.value, Timeouts.EXTERNAL_API_CALL)
        ),
        gt=0,
        description="Request timeout in seconds",
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


class ErrorLogConfig(BaseModel):
    """Bounds for the diagnostic error log."""

    max_entries: int = Field(
        default=Limits.ERROR_LOG_MAX_ENTRIES, gt=0, description="Length that triggers eviction"
    )
    evict_count: int = Field(
        default=Limits.ERROR_LOG_EVICT_COUNT, gt=0, description="Entries dropped per eviction"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default_factory=lambda: os.getenv(EnvironmentVariable.LOG_LEVEL.value, LogLevel.INFO.value),
        description="Logging level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    @field_validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {level.value for level in LogLevel}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class AppConfig(BaseModel):
    """Main application configuration."""

    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage key configuration"
    )
    remote: RemoteConfig = Field(default_factory=RemoteConfig, description="Remote API configuration")
    error_log: ErrorLogConfig = Field(
        default_factory=ErrorLogConfig, description="Error log configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls()


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
