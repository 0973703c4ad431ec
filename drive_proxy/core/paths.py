# drive_proxy/core/paths.py
"""
Turning request paths into the folder/file segments the resolver walks.
"""
from typing import Iterable, List, Union
from urllib.parse import unquote

from drive_proxy.core.errors import DriveProxyError


class InvalidPath(DriveProxyError):
    """A segment holds a percent-escape that is not valid UTF-8."""


def split_path(raw: Union[str, Iterable[str]]) -> List[str]:
    """Percent-decode path segments and drop the empty ones.

    Accepts either a slash-joined path or already split segments. The last
    element of the result is the filename, the rest are folder names.
    Raises InvalidPath on malformed escapes such as a lone `%E9`.
    """
    if isinstance(raw, str):
        raw = raw.split("/")
    segments = []
    for part in raw:
        try:
            segment = unquote(part, errors="strict")
        except UnicodeDecodeError as exc:
            raise InvalidPath(f"Malformed escape in path segment {part!r}") from exc
        if segment:
            segments.append(segment)
    return segments
