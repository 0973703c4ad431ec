# drive_proxy/core/stream_proxy.py
"""
Relaying a resolved file's bytes to the caller.

The fetch step returns one of three outcomes instead of raising:

- StreamOutcome: upstream answered, body is relayed as-is
- RedirectOutcome: upstream could not be streamed, send the client there
- ErrorOutcome: nothing to fetch (file record has no content URL)
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Optional, Union
from urllib.parse import quote

import aiohttp
from starlette.responses import PlainTextResponse, RedirectResponse, Response, StreamingResponse

from drive_proxy.config import settings
from drive_proxy.core.models import FileRef
from drive_proxy.monitoring.logger import log

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CACHE_CONTROL = "public, max-age=60, s-maxage=600, stale-while-revalidate=86400"
CHUNK_SIZE = 1024 * 64


@dataclass
class StreamOutcome:
    body: AsyncIterator[bytes]
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class RedirectOutcome:
    url: str


@dataclass
class ErrorOutcome:
    status: int
    message: str


FetchOutcome = Union[StreamOutcome, RedirectOutcome, ErrorOutcome]


def encode_rfc5987(value: str) -> str:
    """Percent-encode for `filename*=`; only A-Z a-z 0-9 - _ . ! ~ stay literal."""
    return quote(value, safe="!~")


def content_disposition(filename: str) -> str:
    return f"inline; filename*=UTF-8''{encode_rfc5987(filename)}"


def build_headers(file: FileRef, filename: str, upstream_type: Optional[str] = None, upstream_length: Optional[str] = None, upstream_encoding: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "Content-Type": upstream_type or file.content_type or DEFAULT_CONTENT_TYPE,
        "Cache-Control": CACHE_CONTROL,
        "Content-Disposition": content_disposition(filename),
    }
    # aiohttp decompresses encoded bodies, so the upstream length no longer applies
    if upstream_length and not upstream_encoding:
        headers["Content-Length"] = upstream_length
    return headers


class StreamProxy:
    """Fetches content URLs and hands back a fetch outcome.

    Caller headers and credentials are never forwarded; content URLs are
    expected to be directly accessible.
    """

    def __init__(self, user_agent: Optional[str] = None, session: aiohttp.ClientSession | None = None, chunk_size: int = CHUNK_SIZE):
        self.user_agent = user_agent or settings.PROXY_USER_AGENT
        self.chunk_size = chunk_size
        self._external_session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._external_session is not None:
            return self._external_session
        return aiohttp.ClientSession()

    async def _release(self, resp, session) -> None:
        if resp is not None:
            resp.close()
        if self._external_session is None:
            await session.close()

    async def fetch(self, file: FileRef, filename: str) -> FetchOutcome:
        url = file.content_url
        if not url:
            log("ERROR", f"File record {file.id} has no content url", module="stream_proxy")
            return ErrorOutcome(502, "Upstream file url missing")

        headers = {"User-Agent": self.user_agent, "Accept-Encoding": "identity"}
        session = self._get_session()
        resp = None
        first_chunk = b""
        try:
            resp = await session.get(url, headers=headers)
            if 200 <= resp.status < 300:
                first_chunk = await resp.content.read(self.chunk_size)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            log("WARNING", f"Content fetch failed, redirecting: {exc}", module="stream_proxy")
            await self._release(resp, session)
            return RedirectOutcome(url)

        if not 200 <= resp.status < 300:
            log("WARNING", f"Content fetch returned {resp.status}, redirecting", module="stream_proxy", status=resp.status)
            await self._release(resp, session)
            return RedirectOutcome(url)

        log("INFO", f"Streaming file {file.id}", module="stream_proxy")
        return StreamOutcome(
            body=self._relay(resp, session, first_chunk),
            headers=build_headers(
                file,
                filename,
                upstream_type=resp.headers.get("Content-Type"),
                upstream_length=resp.headers.get("Content-Length"),
                upstream_encoding=resp.headers.get("Content-Encoding"),
            ),
        )

    async def _relay(self, resp, session, first_chunk: bytes) -> AsyncIterator[bytes]:
        try:
            if first_chunk:
                yield first_chunk
            async for chunk in resp.content.iter_chunked(self.chunk_size):
                yield chunk
        finally:
            await self._release(resp, session)


def to_response(outcome: FetchOutcome) -> Response:
    if isinstance(outcome, StreamOutcome):
        return StreamingResponse(outcome.body, status_code=200, headers=outcome.headers)
    if isinstance(outcome, RedirectOutcome):
        return RedirectResponse(outcome.url, status_code=302)
    return PlainTextResponse(outcome.message, status_code=outcome.status)
