"""Central configuration for the PI email relay.

This module uses Pydantic Settings for validation and env management.
"""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent

EMAIL_REPORT_FILENAME = "2022-pi-email-report.xlsx"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class EmailTableSettings(BaseSettings):
    """Location of the PI email spreadsheet."""
    model_config = SettingsConfigDict(env_prefix="EMAIL_TABLE_", extra="ignore")

    dev_path: Path = Field(default=BASE_DIR / EMAIL_REPORT_FILENAME)
    prod_path: Path = Field(default=Path("/app") / EMAIL_REPORT_FILENAME)
    fallback_dir: Path = Field(
        default=Path("/app"),
        description="Directory listed in diagnostics when loading fails",
    )


class UpstreamSettings(BaseSettings):
    """NIH RePORTER search API."""
    model_config = SettingsConfigDict(env_prefix="UPSTREAM_", extra="ignore")

    search_url: str = Field(default="https://api.reporter.nih.gov/v2/projects/search")
    timeout: float | None = Field(default=None, gt=0, description="Seconds; None waits indefinitely")


class CORSSettings(BaseSettings):
    """Allowed request origins per environment."""
    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    dev_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    prod_origins: list[str] = Field(default_factory=lambda: ["https://inkr.netlify.app"])
    methods: list[str] = Field(default_factory=lambda: ["GET", "POST"])
    headers: list[str] = Field(default_factory=lambda: ["Content-Type"])


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    level: str = Field(default="INFO")
    format: str = Field(default="json")
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    app_name: str = Field(default="PI Email Relay")
    version: str = Field(default="0.1.0")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)
    static_dir: Path = Field(default=BASE_DIR / "dist")

    # Sub-configs
    email_table: EmailTableSettings = Field(default_factory=EmailTableSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def is_development(self) -> bool:
        # Anything short of an explicit production flag counts as development.
        return self.environment != Environment.PRODUCTION

    @property
    def email_table_path(self) -> Path:
        """Spreadsheet path for the current environment."""
        if self.is_development:
            return self.email_table.dev_path
        return self.email_table.prod_path

    @property
    def cors_origins(self) -> list[str]:
        return self.cors.dev_origins if self.is_development else self.cors.prod_origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()
