"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment."""

    return AppSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


def _build_server_settings() -> "ServerSettings":
    return ServerSettings()


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable the global rate limiter on every route",
    )
    rate_limit_requests_per_second: float = Field(
        10.0,
        description="Token refill rate per client, shared across all routes",
        gt=0,
    )
    rate_limit_burst: int = Field(
        10,
        description="Bucket capacity: requests a client may send at once",
        ge=1,
    )
    rate_limit_ip_lookups: list[str] = Field(
        default_factory=lambda: ["RemoteAddr", "X-Forwarded-For", "X-Real-IP"],
        description="Ordered sources for the client identity key; first present wins",
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    rate_limit_max_keys: int = Field(
        10000,
        description="Tracked client buckets before fully refilled ones are pruned",
        ge=1,
    )

    compute_min_delay_ms: int = Field(
        500,
        description="Lower bound (inclusive) of the simulated backend delay",
        ge=0,
    )
    compute_max_delay_ms: int = Field(
        1500,
        description="Upper bound (exclusive) of the simulated backend delay",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "AppSettings":
        if self.compute_max_delay_ms <= self.compute_min_delay_ms:
            raise ValueError("compute_max_delay_ms must be greater than compute_min_delay_ms")
        return self


class LogSettings(BaseSettings):
    """Logging configuration.

    ``format`` selects between the JSON formatter and a plain text one;
    ``output`` selects stdout or a (optionally rotating) log file.
    """

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to accept and propagate the request id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class ServerSettings(BaseSettings):
    """Uvicorn bind address."""

    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(8080, description="TCP port to listen on", ge=1, le=65535)

    model_config = SettingsConfigDict(
        env_prefix="SERVER_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are invalid.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)
    server: ServerSettings = Field(default_factory=_build_server_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
