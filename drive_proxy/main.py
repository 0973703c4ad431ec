# drive_proxy/main.py
"""
Main FastAPI app: drive proxy and health routes with monitoring integration.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from uuid import uuid4
import traceback

from drive_proxy import __version__
from drive_proxy.core.errors import ConfigurationMissing, UpstreamAPIError
from drive_proxy.monitoring.logger import log
from drive_proxy.monitoring.errors import record_error
from drive_proxy.monitoring.slack_alerts import send_slack_alert
from drive_proxy.monitoring.context import set_request_context
from drive_proxy.middleware.extension_rewrite import ExtensionRewriteMiddleware
from drive_proxy.api.health import router as health_router
from drive_proxy.api.proxy import router as proxy_router

app = FastAPI(title="Drive Proxy", version=__version__)

# Static-looking paths are served from the drive
app.add_middleware(ExtensionRewriteMiddleware)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = str(uuid4())
    request.state.request_id = request_id
    set_request_context(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(ConfigurationMissing)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    log("ERROR", str(exc), module="main", missing=exc.missing)
    return PlainTextResponse("Server misconfigured: MK_API/MK_TK missing", status_code=500)

@app.exception_handler(UpstreamAPIError)
async def upstream_api_error_handler(request: Request, exc: UpstreamAPIError):
    request_id = getattr(request.state, "request_id", None)
    await record_error(
        component="drive_client",
        function=exc.path,
        message=str(exc),
        details={"status": exc.status},
        request_id=request_id,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Upstream API error",
            "request_id": request_id,
            "detail": exc.detail,
        }
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None)
    tb = traceback.format_exc()
    log(
        "ERROR",
        f"Unhandled exception: {exc}",
        module="main",
        request_id=request_id
    )
    await send_slack_alert(
        message=f"Critical error: {exc}",
        context={"traceback": tb},
        severity="CRITICAL",
        module="main",
        request_id=request_id
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "request_id": request_id,
            "detail": "An unexpected error occurred."
        }
    )

# Mount routers
app.include_router(health_router)
app.include_router(proxy_router)

# Logging initialization
log("INFO", "Drive proxy started", module="main", version=__version__)
