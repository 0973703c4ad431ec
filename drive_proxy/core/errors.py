# drive_proxy/core/errors.py
"""
Error types raised by the drive proxy.

Structural absence of a folder or file is not an error: the resolver
returns None for it. Content fetch failures are modelled as outcomes in
`stream_proxy`, not exceptions.
"""
from typing import Optional


class DriveProxyError(Exception):
    """Base class for drive proxy errors."""


class ConfigurationMissing(DriveProxyError):
    """MK_API and/or MK_TK are not configured."""

    def __init__(self, missing: Optional[list] = None):
        self.missing = missing or []
        names = "/".join(self.missing) or "MK_API/MK_TK"
        super().__init__(f"Server misconfigured: {names} missing")


class UpstreamAPIError(DriveProxyError):
    """The remote drive API was reachable but rejected the call."""

    def __init__(self, path: str, status: int, body: str = ""):
        self.path = path
        self.status = status
        self.body = body
        super().__init__(f"Drive API error {path} {status}: {body}")

    @property
    def detail(self) -> str:
        return f"{self.path} {self.status}: {self.body}"
