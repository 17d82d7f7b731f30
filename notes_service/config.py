"""
Configuration management for the Notes service.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Environment(str, Enum):
    """Deployment environment, fixed at deploy time."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        """Convert a raw config value, failing with a descriptive message."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(e.value for e in cls)
            raise ConfigurationError(
                f"Unknown environment {value!r}; expected one of: {allowed}"
            ) from None


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Notes API")
    debug: bool = Field(default=False)
    environment: Environment = Field(default=Environment.DEVELOPMENT)

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8080)
    api_workers: int = Field(default=1)

    # Database
    database_url: str = Field(default="sqlite:///./notes.db")

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # Seeding
    seed_count: int = Field(default=5, ge=0)

    # Image digest suffix injected at deploy time to force new revisions
    digest: Optional[str] = Field(default=None)

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        """Accept environment names in any case, as the CLI does."""
        if isinstance(v, str):
            try:
                return Environment.parse(v)
            except ConfigurationError as exc:
                raise ValueError(str(exc)) from None
        return v


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
