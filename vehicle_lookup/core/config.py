"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


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

# Serverless/container deployments may inject env vars only
_env_file = str(_env_path) if _env_path.is_file() else None

# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level name")
    format: str = Field("json", description="Log format: 'json' or 'plain'")
    output: str = Field("stdout", description="Log destination: 'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(3, description="Rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to accept and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable DEBUG-level logging (error responses keep their JSON shape)",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client fixed-window rate limiting",
    )
    rate_limit_requests: int = Field(
        10,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        60,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    client_ip_header: str = Field(
        "X-Forwarded-For",
        description="Header carrying the forwarded client IP used as rate limit key",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class VinDecoderSettings(BaseSettings):
    """External VIN decode service configuration."""

    provider: str = Field(
        "nhtsa",
        description="VIN decoder provider name (currently: nhtsa)",
    )
    base_url: str = Field(
        "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVin",
        description="Base URL; requests go to {base_url}/{vin}?format=json",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout for the outbound decode call in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="VIN_DECODER_",
        case_sensitive=False,
    )


class PlateLookupSettings(BaseSettings):
    """License plate lookup provider configuration."""

    provider: str = Field(
        "mock",
        description="Plate lookup provider name (currently: mock)",
    )
    mock_vin: str | None = Field(
        None,
        description="VIN the mock provider resolves every plate to (unset: no VIN)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PLATE_LOOKUP_",
        case_sensitive=False,
    )


class HistorySettings(BaseSettings):
    """Vehicle history provider configuration."""

    provider: str = Field(
        "mock",
        description="Vehicle history provider name (currently: mock)",
    )

    model_config = SettingsConfigDict(
        env_prefix="HISTORY_",
        case_sensitive=False,
    )


# BaseSettings populate fields from the environment, but type checkers treat
# required fields as constructor arguments; these builders keep that in one place.
def _build_log_settings() -> LogSettings:
    return LogSettings()  # type: ignore[call-arg]


def _build_app_settings() -> AppSettings:
    return AppSettings()  # type: ignore[call-arg]


def _build_vin_decoder_settings() -> VinDecoderSettings:
    return VinDecoderSettings()  # type: ignore[call-arg]


def _build_plate_lookup_settings() -> PlateLookupSettings:
    return PlateLookupSettings()  # type: ignore[call-arg]


def _build_history_settings() -> HistorySettings:
    return HistorySettings()  # type: ignore[call-arg]


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    log: LogSettings = Field(default_factory=_build_log_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    vin_decoder: VinDecoderSettings = Field(default_factory=_build_vin_decoder_settings)
    plate_lookup: PlateLookupSettings = Field(default_factory=_build_plate_lookup_settings)
    history: HistorySettings = Field(default_factory=_build_history_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
