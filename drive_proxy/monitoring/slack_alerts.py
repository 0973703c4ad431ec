"""
Slack alerting for the drive proxy.
"""
import httpx
from drive_proxy.config import settings
from drive_proxy.monitoring.logger import log
from typing import Optional, Dict

async def send_slack_alert(message: str, context: Optional[Dict] = None, severity: str = "ERROR", module: str = None, request_id: str = None):
    webhook_url = settings.SLACK_WEBHOOK_URL
    if not webhook_url:
        log("WARNING", "Slack webhook URL not configured", module=module, request_id=request_id)
        return
    payload = {
        "text": f"[{settings.ENVIRONMENT}] [{severity}] [{module}] {message}\nRequest ID: {request_id}\nContext: {context or {}}"
    }
    try:
        async with httpx.AsyncClient() as client:
            await client.post(webhook_url, json=payload, timeout=5)
    except httpx.HTTPError as e:
        log("ERROR", f"Failed to send Slack alert: {e}", module=module, request_id=request_id)
