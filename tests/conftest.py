import aiohttp
import pytest
import pytest_asyncio

from drive_proxy.config import DriveConfig, settings


@pytest.fixture
def drive_config():
    return DriveConfig(origin="https://drive.example", token="secret-token")


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(settings, "MK_API", "https://drive.example/api/")
    monkeypatch.setattr(settings, "MK_TK", "secret-token")
    return settings


@pytest_asyncio.fixture
async def client():
    from httpx import AsyncClient, ASGITransport
    from drive_proxy.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def connection_error():
    return aiohttp.ClientConnectionError("connection refused")
