"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    document_directory_url: str | None = None
    directory_timeout_seconds: float = 10
    content_timeout_seconds: float = 30
    expiry_poll_seconds: float = 60
    max_sessions: int = 1000
    session_idle_seconds: float = 1800
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str | None) -> str | None:
    """Normalize the directory base address override.

    Empty values mean no override; the directory is then reached on the same
    origin as the viewer.
    """
    if raw is None:
        return None
    cleaned = raw.strip().rstrip("/")
    return cleaned or None
