"""
Health endpoint reporting whether the drive settings are present.
"""
import time

from fastapi import APIRouter
from starlette.status import HTTP_200_OK

from drive_proxy.config import settings

router = APIRouter(tags=["health"])


@router.get("/h", status_code=HTTP_200_OK)
@router.get("/api/h", status_code=HTTP_200_OK, include_in_schema=False)
async def health() -> dict:
    """Shallow health endpoint. Reports presence, never values, of MK_API/MK_TK."""
    return {
        "ok": True,
        "now": int(time.time() * 1000),
        "hasMK_API": bool(settings.MK_API),
        "hasMK_TK": bool(settings.MK_TK),
    }
