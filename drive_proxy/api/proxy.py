"""
Drive proxy route: `/mk/<folder>/<folder>/<file>` → streamed file content.
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from drive_proxy.api.deps import get_resolver, get_stream_proxy
from drive_proxy.core.paths import InvalidPath, split_path
from drive_proxy.core.resolver import PathResolver
from drive_proxy.core.stream_proxy import StreamProxy, to_response
from drive_proxy.middleware.extension_rewrite import PROXY_PREFIX
from drive_proxy.monitoring.logger import log

router = APIRouter(prefix=PROXY_PREFIX, tags=["proxy"])


def _raw_segments(request: Request, path: str) -> List[str]:
    # Split the still-encoded path so an escaped slash stays inside its segment
    raw = request.scope.get("raw_path")
    prefix = PROXY_PREFIX + "/"
    if raw:
        raw_text = raw.decode("latin-1")
        if raw_text.startswith(prefix):
            return raw_text[len(prefix):].split("/")
    return path.split("/")


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("Not Found", status_code=404)


@router.api_route("/{path:path}", methods=["GET", "HEAD"])
async def proxy_file(
    path: str,
    request: Request,
    resolver: PathResolver = Depends(get_resolver),
    stream_proxy: StreamProxy = Depends(get_stream_proxy),
):
    try:
        segments = split_path(_raw_segments(request, path))
    except InvalidPath as exc:
        log("INFO", str(exc), module="proxy")
        return _not_found()
    if not segments:
        return _not_found()

    target = await resolver.resolve(segments)
    if target is None:
        log("INFO", f"Not found: /{'/'.join(segments)}", module="proxy")
        return _not_found()

    outcome = await stream_proxy.fetch(target.file, segments[-1])
    return to_response(outcome)
