"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- APIConfig: VocaDB and discovery backend endpoints, concurrency, timeouts
- DisplayConfig: Date formatting for the rendered collection
- BatchConfig: Progress reporting settings
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("vocaworks.log")
    real_time_debug: bool = True


class APIConfig(BaseModel):
    """External API configuration."""

    # Discovery backend (alias -> producer id -> song ids)
    environment: Literal["production", "development"] = "production"
    discovery_production_url: str = "https://api.voca.wiki"
    discovery_development_url: str = "http://127.0.0.1:8000"

    # VocaDB catalog
    vocadb_base_url: str = "https://vocadb.net/api"
    vocadb_site_url: str = "https://vocadb.net"
    vocadb_concurrency: int = 10
    vocadb_page_size: int = 10

    request_timeout: float = 30.0
    user_agent: str = "vocaworks/0.1.0"


class DisplayConfig(BaseModel):
    """Rendering options for the produced song collection."""

    date_format: str = "%Y-%m-%d"
    unknown_date_label: str = "unknown"


class BatchConfig(BaseModel):
    """Batch processing and progress reporting configuration."""

    progress_log_frequency: int = 10


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: VOCAWORKS_ENV, CONSOLE_LOG_LEVEL, VOCADB_API_CONCURRENCY
    - Nested: API__ENVIRONMENT, LOGGING__CONSOLE_LEVEL, API__VOCADB_CONCURRENCY

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    api: APIConfig = APIConfig()
    display: DisplayConfig = DisplayConfig()
    batch: BatchConfig = BatchConfig()

    # Flat environment names, folded into the groups above by transform_flat_env_vars
    console_log_level: str | None = Field(default=None, exclude=True)
    file_log_level: str | None = Field(default=None, exclude=True)
    log_file: Path | None = Field(default=None, exclude=True)
    log_real_time_debug: bool | None = Field(default=None, exclude=True)
    vocaworks_env: Literal["production", "development"] | None = Field(
        default=None, exclude=True
    )
    vocadb_api_concurrency: int | None = Field(default=None, exclude=True)
    vocadb_api_page_size: int | None = Field(default=None, exclude=True)
    vocadb_api_timeout: float | None = Field(default=None, exclude=True)

    @property
    def discovery_base_url(self) -> str:
        """Discovery backend URL for the configured environment."""
        if self.api.environment == "development":
            return self.api.discovery_development_url
        return self.api.discovery_production_url

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (CONSOLE_LOG_LEVEL) and maps them to the
        nested structure expected by the models (logging.console_level).
        """
        if not isinstance(data, dict):
            return data

        transformed = {}

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        api_mapping = {
            "vocaworks_env": "environment",
            "vocadb_api_concurrency": "vocadb_concurrency",
            "vocadb_api_page_size": "vocadb_page_size",
            "vocadb_api_timeout": "request_timeout",
        }
        for env_key, field_key in api_mapping.items():
            if env_key in data:
                transformed.setdefault("api", {})[field_key] = data.pop(env_key)

        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # API settings
    "VOCAWORKS_ENV": lambda: settings.api.environment,
    "DISCOVERY_BASE_URL": lambda: settings.discovery_base_url,
    "VOCADB_BASE_URL": lambda: settings.api.vocadb_base_url,
    "VOCADB_SITE_URL": lambda: settings.api.vocadb_site_url,
    "VOCADB_API_CONCURRENCY": lambda: settings.api.vocadb_concurrency,
    "VOCADB_API_PAGE_SIZE": lambda: settings.api.vocadb_page_size,
    "VOCADB_API_TIMEOUT": lambda: settings.api.request_timeout,
    "USER_AGENT": lambda: settings.api.user_agent,
    # Display settings
    "DISPLAY_DATE_FORMAT": lambda: settings.display.date_format,
    "DISPLAY_UNKNOWN_DATE": lambda: settings.display.unknown_date_label,
    # Batch processing settings
    "BATCH_PROGRESS_LOG_FREQUENCY": lambda: settings.batch.progress_log_frequency,
}


def get_config(key: str, default=None):
    """Get configuration value by key with optional default.

    Maps flat keys to the nested Pydantic settings structure.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> concurrency = get_config("VOCADB_API_CONCURRENCY", 10)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
