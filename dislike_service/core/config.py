"""
Application configuration models and helpers.

Centralizes settings management so the API routes, the provider client and the
maintenance scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class ProviderSettings(BaseSettings):
    """Credentials and endpoints of the upstream OAuth identity provider."""

    client_id: str = Field(..., alias="OAUTH_CLIENT_ID")
    client_secret: str = Field(..., alias="OAUTH_CLIENT_SECRET")
    base_url: str = Field("https://qiita.com/api/v2", alias="OAUTH_PROVIDER_BASE_URL")
    scope: str = Field("read_qiita", alias="OAUTH_SCOPE")
    timeout_seconds: float = Field(
        10.0,
        alias="OAUTH_PROVIDER_TIMEOUT",
        description="Timeout applied to every single-attempt provider call.",
    )

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class OAuthSettings(BaseSettings):
    """Handshake cookie and throttling configuration."""

    cookie_ttl_seconds: int = Field(300, alias="OAUTH_COOKIE_TTL")
    callback_delay_seconds: float = Field(
        0.5,
        alias="OAUTH_CALLBACK_DELAY",
        description="Pause applied before exchanging an authorization code.",
    )
    state_secret: Optional[str] = Field(
        None,
        alias="OAUTH_STATE_SECRET",
        description=(
            "Shared key for signing state tokens. A random per-process key is "
            "used when omitted, so restarts invalidate in-flight handshakes."
        ),
    )
    secure_cookies: bool = Field(False, alias="OAUTH_SECURE_COOKIES")

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    environment: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    database_path: str = Field("data/dislike.db", alias="DATABASE_PATH")
    api_prefix: str = Field("/api/v1", alias="API_PREFIX")
    request_timeout_seconds: float = Field(10.0, alias="REQUEST_TIMEOUT")
    cors_allow_origins: str = Field(
        "*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed by CORS.",
    )
    access_log_enabled: bool = Field(True, alias="ACCESS_LOG_ENABLED")
    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Support providing origins as a comma-separated string."""
        return [
            origin.strip()
            for origin in self.cors_allow_origins.split(",")
            if origin.strip()
        ]


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "OAuthSettings",
    "ProviderSettings",
    "get_settings",
]
