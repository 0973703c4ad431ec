# drive_proxy/core/resolver.py
"""
Path resolution against the remote drive.

Folder names are looked up one level at a time, each lookup scoped to the
folder found by the previous one. Lookups are strictly sequential.
"""
from typing import List, Optional, Sequence, TypeVar, Union

from drive_proxy.core.models import FileRef, ResolvedTarget
from drive_proxy.integrations.drive_client import DriveApiClient
from drive_proxy.monitoring.logger import log


class _NotFound:
    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()

T = TypeVar("T")


def pick_candidate(candidates: List[T], name: str) -> Optional[T]:
    """Prefer an exact (case-sensitive) name match, else the first candidate.

    The remote search does not promise exact-match semantics, so a
    non-matching first result is still accepted.
    """
    for candidate in candidates:
        if candidate.name == name:
            return candidate
    return candidates[0] if candidates else None


class PathResolver:
    def __init__(self, client: DriveApiClient):
        self.client = client

    async def resolve_folder_chain(self, segments: Sequence[str]) -> Union[Optional[str], _NotFound]:
        """Return the id of the last folder in `segments`.

        None means the drive root (empty chain, no API calls). NOT_FOUND is
        returned as soon as one level has no candidates at all.
        """
        parent_id: Optional[str] = None
        for name in segments:
            folders = await self.client.find_folders(name, parent_id)
            folder = pick_candidate(folders, name)
            if folder is None:
                log("INFO", f"Folder not found: {name}", module="resolver", parent_id=parent_id)
                return NOT_FOUND
            parent_id = folder.id
        return parent_id

    async def resolve_file(self, folder_id: Optional[str], name: str) -> Optional[FileRef]:
        files = await self.client.find_files(name, folder_id)
        found = pick_candidate(files, name)
        if found is None:
            log("INFO", f"File not found: {name}", module="resolver", folder_id=folder_id)
        return found

    async def resolve(self, segments: Sequence[str]) -> Optional[ResolvedTarget]:
        """Resolve folder segments + filename to a file, or None when anything is missing."""
        if not segments:
            return None
        folder_id = await self.resolve_folder_chain(segments[:-1])
        if folder_id is NOT_FOUND:
            return None
        found = await self.resolve_file(folder_id, segments[-1])
        if found is None:
            return None
        return ResolvedTarget(folder_id=folder_id, file=found)
