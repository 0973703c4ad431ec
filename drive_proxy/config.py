# drive_proxy/config.py
"""
Configuration management using Pydantic Settings.
"""
from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from drive_proxy.core.errors import ConfigurationMissing


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    # Remote drive API origin, with or without a trailing /api
    MK_API: Optional[str] = None
    # Bearer credential sent as `i` in every drive API call
    MK_TK: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    PROXY_USER_AGENT: str = "Misskey-Drive-Proxy"
    SLACK_WEBHOOK_URL: Optional[str] = None
    ENVIRONMENT: str = "development"


settings = Settings()


@dataclass(frozen=True)
class DriveConfig:
    """Resolved connection settings for one request."""
    origin: str
    token: str


def normalize_origin(raw: str) -> str:
    """Strip trailing slashes and a trailing `/api` so both forms behave the same."""
    origin = raw.rstrip("/")
    if origin.endswith("/api"):
        origin = origin[: -len("/api")]
    return origin


def load_drive_config(source: Optional[Settings] = None) -> DriveConfig:
    source = source or settings
    missing = [name for name in ("MK_API", "MK_TK") if not getattr(source, name)]
    if missing:
        raise ConfigurationMissing(missing)
    return DriveConfig(origin=normalize_origin(source.MK_API), token=source.MK_TK)
