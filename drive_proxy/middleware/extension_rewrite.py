"""Static-looking URL rewriting.

Any request path ending in a dotted extension (`/docs/a.png`) is served by
the drive proxy route, as if the drive were a static file tree. The path is
rewritten in the ASGI scope before routing; the query string is untouched.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from drive_proxy.monitoring.logger import log

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

FILE_EXT_RE = re.compile(r"\.[^/]+$")

PROXY_PREFIX = "/mk"


class ExtensionRewriteMiddleware:
    """
    Rewrites `/<path>.<ext>` to `<prefix>/<path>.<ext>`.

    Framework routes and well-known static files are left alone.
    """

    EXEMPT_PATHS: ClassVar[set[str]] = {
        "/favicon.ico",
        "/robots.txt",
        "/sitemap.xml",
        "/openapi.json",
        "/h",
    }

    EXEMPT_PREFIXES: ClassVar[tuple[str, ...]] = (
        "/api/",
    )

    def __init__(self, app: ASGIApp, prefix: str = PROXY_PREFIX):
        self.app = app
        self.prefix = prefix.rstrip("/")

    def should_rewrite(self, path: str) -> bool:
        if path in self.EXEMPT_PATHS:
            return False
        if path.startswith(self.EXEMPT_PREFIXES):
            return False
        if path == self.prefix or path.startswith(self.prefix + "/"):
            return False
        return bool(FILE_EXT_RE.search(path))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.should_rewrite(scope["path"]):
            await self.app(scope, receive, send)
            return

        scope = dict(scope)
        scope["path"] = self.prefix + scope["path"]
        raw_path = scope.get("raw_path")
        if raw_path:
            scope["raw_path"] = self.prefix.encode("latin-1") + raw_path
        log("DEBUG", f"Rewrote request path to {scope['path']}", module="extension_rewrite")
        await self.app(scope, receive, send)
