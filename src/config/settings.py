"""
Configuration management for Resilient Fetch.

Uses Pydantic for type-safe, validated configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class FetcherSettings(BaseSettings):
    """Main configuration for Resilient Fetch.

    Settings can be overridden via:
    1. Environment variables (prefixed with FETCHER_)
    2. .env file in project root
    3. Programmatic overrides

    Example:
        export FETCHER_TIMEOUT_MS=2500
        export FETCHER_LOG_LEVEL=DEBUG
    """

    # === Request defaults ===
    timeout_ms: int = Field(
        default=1000,
        ge=1,
        description="Base per-attempt deadline in milliseconds (doubles per retry)",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retry budget after the first attempt",
    )
    retry_delay_ms: int = Field(
        default=200,
        ge=0,
        description="Fixed wait between attempts in milliseconds",
    )
    verbose_logging: bool = Field(
        default=False, description="Emit attempt and duration diagnostics at INFO"
    )

    # === HTTP ===
    default_scheme: Literal["http", "https"] = Field(
        default="https", description="Scheme prepended by ensure_scheme()"
    )
    user_agent: str = Field(
        default="ResilientFetch/1.0", description="User-Agent header value"
    )

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_rotation: str = Field(default="10 MB", description="Log file rotation size")
    log_retention: str = Field(
        default="10 days", description="Log file retention period"
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")
    logs_dir: Path = Field(default=Path("logs"), description="Log files directory")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = {
        "env_prefix": "FETCHER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = FetcherSettings()


def reload_settings() -> FetcherSettings:
    """Reload settings from environment and .env file.

    Useful for testing or runtime configuration changes.
    """
    global settings
    settings = FetcherSettings()
    return settings
