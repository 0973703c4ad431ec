# drive_proxy/core/models.py
"""
Drive records as returned by the remote API.

Only the fields the proxy relies on are declared; anything else the
server sends is ignored.
"""
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FolderRef(BaseModel):
    """A remote folder. Root folders have no parent."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    name: str
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class FileRef(BaseModel):
    """A remote file record. `content_url` may be missing even when the file exists."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    name: str
    content_type: Optional[str] = Field(default=None, alias="type")
    size: Optional[int] = None
    content_url: Optional[str] = Field(default=None, alias="url")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")


@dataclass(frozen=True)
class ResolvedTarget:
    """A file and the folder it was found in (None = drive root)."""
    folder_id: Optional[str]
    file: FileRef
