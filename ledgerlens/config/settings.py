"""
Configuration Management for ledgerlens

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage adapters and report defaults read from these settings, so the
knobs that change between deployments are visible in one place.
"""

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the raw ledger text comes from."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        extra="ignore"
    )

    file_path: Optional[str] = Field(
        default=None,
        description="Path to a local .ledger file"
    )
    server_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the ledger server"
    )
    year: int = Field(
        default_factory=lambda: date.today().year,
        ge=1900,
        le=9999,
        description="Ledger year requested from the server"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP timeout for one ledger fetch"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for transport-level fetch failures"
    )

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the ledger file doesn't exist (but don't fail - might be mounted later)."""
        if v and not Path(v).exists():
            import warnings
            warnings.warn(
                f"Ledger file not found at {v}. "
                "Make sure it exists before loading reports."
            )
        return v


class ReportSettings(BaseSettings):
    """Defaults for the aggregation engine."""

    model_config = SettingsConfigDict(
        env_prefix="REPORT_",
        extra="ignore"
    )

    trend_threshold: float = Field(
        default=0.20,
        gt=0.0,
        le=10.0,
        description="Relative change a category needs before it shows up as a trend"
    )
    top_income_categories: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Income categories kept in trend series"
    )
    audit_buffer_size: int = Field(
        default=1000,
        ge=10,
        description="Events kept by the in-memory audit sink"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def reports(self) -> ReportSettings:
        return ReportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "reports", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
