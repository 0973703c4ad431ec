"""
FastAPI dependencies wiring configuration into the proxy components.

Tests override `get_resolver` / `get_stream_proxy` to inject fakes.
"""
from fastapi import Depends

from drive_proxy.config import DriveConfig, load_drive_config, settings
from drive_proxy.core.resolver import PathResolver
from drive_proxy.core.stream_proxy import StreamProxy
from drive_proxy.integrations.drive_client import DriveApiClient


def get_drive_config() -> DriveConfig:
    """Raises ConfigurationMissing when MK_API/MK_TK are unset."""
    return load_drive_config(settings)


def get_resolver(config: DriveConfig = Depends(get_drive_config)) -> PathResolver:
    return PathResolver(DriveApiClient(config))


def get_stream_proxy() -> StreamProxy:
    return StreamProxy(user_agent=settings.PROXY_USER_AGENT)
