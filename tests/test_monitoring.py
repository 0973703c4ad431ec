import json
import logging

import httpx
import pytest

from drive_proxy.config import settings
from drive_proxy.monitoring.context import get_request_context, set_request_context
from drive_proxy.monitoring.errors import record_error
from drive_proxy.monitoring.logger import JsonFormatter, log
from drive_proxy.monitoring import slack_alerts


class RecordingAsyncClient:
    posts = []
    error = None

    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def post(self, url, json=None, timeout=None):
        if RecordingAsyncClient.error is not None:
            raise RecordingAsyncClient.error
        RecordingAsyncClient.posts.append((url, json))


@pytest.fixture
def slack(monkeypatch):
    RecordingAsyncClient.posts = []
    RecordingAsyncClient.error = None
    monkeypatch.setattr(settings, "SLACK_WEBHOOK_URL", "https://hooks.slack.test/T000")
    monkeypatch.setattr(slack_alerts.httpx, "AsyncClient", RecordingAsyncClient)
    return RecordingAsyncClient


def test_json_formatter_includes_context_and_extra_fields():
    record = logging.LogRecord("drive_proxy", logging.INFO, __file__, 1, "hello", None, None)
    record.component = "resolver"
    record.request_id = "rid-1"
    record.status = 404

    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "hello"
    assert data["level"] == "INFO"
    assert data["component"] == "resolver"
    assert data["request_id"] == "rid-1"
    assert data["status"] == 404


def test_logger_context_injection():
    # Ensure log() doesn't crash when context is missing
    log('INFO', 'test message', component='test')
    set_request_context(request_id="rid-2")
    assert get_request_context()["request_id"] == "rid-2"
    log('INFO', 'with context', module='test', status=200)


@pytest.mark.asyncio
async def test_slack_alert_posts_payload(slack):
    await slack_alerts.send_slack_alert("boom", context={"k": "v"}, severity="CRITICAL", module="main", request_id="rid")

    url, payload = slack.posts[0]
    assert url == "https://hooks.slack.test/T000"
    assert "[CRITICAL] [main] boom" in payload["text"]
    assert "rid" in payload["text"]


@pytest.mark.asyncio
async def test_slack_alert_skipped_without_webhook(slack, monkeypatch):
    monkeypatch.setattr(settings, "SLACK_WEBHOOK_URL", None)
    await slack_alerts.send_slack_alert("boom")
    assert slack.posts == []


@pytest.mark.asyncio
async def test_record_error_does_not_raise_when_slack_fails(slack):
    slack.error = httpx.ConnectError("slack down")
    await record_error('drive_client', '/api/drive/files/find', 'an error occurred', details={'status': 500}, request_id='rid')


@pytest.mark.asyncio
async def test_record_error_alerts_only_for_errors(slack):
    await record_error('resolver', 'resolve', 'just a warning', severity="WARNING")
    assert slack.posts == []
    await record_error('resolver', 'resolve', 'real failure', stacktrace="trace")
    assert len(slack.posts) == 1
    assert "trace" in slack.posts[0][1]["text"]
