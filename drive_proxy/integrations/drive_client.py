"""drive_proxy/integrations/drive_client.py
Client for the remote drive API (Misskey-compatible).

Responsibilities:
- Build API URLs from the normalized origin held in `DriveConfig`
- Send the credential as `i` in every JSON body
- Raise `UpstreamAPIError` on any non-success status (no retries)
- Expose the two lookups the resolver needs: find_folders, find_files
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import aiohttp

from drive_proxy.config import DriveConfig
from drive_proxy.core.errors import UpstreamAPIError
from drive_proxy.core.models import FileRef, FolderRef
from drive_proxy.monitoring.logger import log

FOLDERS_FIND_PATH = "/api/drive/folders/find"
FILES_FIND_PATH = "/api/drive/files/find"


def api_url(origin: str, path: str) -> str:
    return urljoin(origin + "/", path)


class DriveApiClient:
    """Thin client for drive lookups.

    When a session is injected it is reused and left open; otherwise each
    call opens and closes its own session.
    """

    def __init__(self, config: DriveConfig, session: aiohttp.ClientSession | None = None):
        self.config = config
        self._external_session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._external_session is not None:
            return self._external_session
        return aiohttp.ClientSession(headers={"Accept": "application/json"})

    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        """POST `body` (plus the credential) to `path` and return the decoded JSON."""
        url = api_url(self.config.origin, path)
        payload = {"i": self.config.token, **body}
        log("INFO", f"Drive API call {path}", module="drive_client")
        session = self._get_session()
        try:
            async with session.post(url, json=payload) as resp:
                if resp.status < 200 or resp.status >= 300:
                    try:
                        text = await resp.text()
                    except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError):
                        text = ""
                    log("ERROR", f"Drive API call failed: {path} {resp.status}", module="drive_client", status=resp.status)
                    raise UpstreamAPIError(path, resp.status, text)
                return await resp.json(content_type=None)
        finally:
            if self._external_session is None:
                await session.close()

    async def find_folders(self, name: str, parent_id: Optional[str]) -> List[FolderRef]:
        data = await self.post(FOLDERS_FIND_PATH, {"name": name, "parentId": parent_id})
        if not isinstance(data, list):
            return []
        return [FolderRef.model_validate(item) for item in data]

    async def find_files(self, name: str, folder_id: Optional[str]) -> List[FileRef]:
        data = await self.post(FILES_FIND_PATH, {"name": name, "folderId": folder_id})
        if not isinstance(data, list):
            return []
        return [FileRef.model_validate(item) for item in data]
