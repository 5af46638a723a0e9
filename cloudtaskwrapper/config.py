"""
Configuration management for the Cloud Tasks wrapper.
"""
import os
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Mapping, Optional


PROJECT_ENV_VAR = "PROJECT_ID"
LOCATION_ENV_VAR = "QUEUE_LOCATION"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cloud Tasks Configuration
    project_id: Optional[str] = None
    queue_location: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None  # e.g. "logs/cloudtaskwrapper_{time:YYYY-MM-DD}.log"


class ClientConfig(BaseModel):
    """Project and location a TaskQueueClient addresses."""

    project: Optional[str] = None
    location: Optional[str] = None


def resolve_config(
    explicit: Optional[ClientConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ClientConfig:
    """
    Resolve the effective client configuration.

    Values from the environment take precedence over the explicit
    configuration. Empty environment values are ignored.

    Args:
        explicit: Configuration passed by the caller
        environ: Environment snapshot (default: os.environ)

    Returns:
        Effective configuration
    """
    if environ is None:
        environ = os.environ
    explicit = explicit or ClientConfig()

    return ClientConfig(
        project=environ.get(PROJECT_ENV_VAR) or explicit.project,
        location=environ.get(LOCATION_ENV_VAR) or explicit.location,
    )


# Global settings instance
settings = Settings()
