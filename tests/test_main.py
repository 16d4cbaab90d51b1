"""Tests for app-level middleware: rate limiting, CORS and security headers."""
import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Environment, get_settings
from app.core import rate_limiting
from app.core.rate_limiting import limiter
from app.main import create_app


@pytest.fixture
def tight_limit(monkeypatch):
    """Enable the limiter at two requests per minute."""
    settings = get_settings().model_copy(update={"rate_limit_per_minute": 2})
    monkeypatch.setattr(rate_limiting, "get_settings", lambda: settings)
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
async def production_client():
    settings = get_settings().model_copy(
        update={"environment": Environment.PRODUCTION, "debug": False}
    )
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_rate_limit_returns_429(client, tight_limit):
    statuses = [(await client.get("/api/v1/tiers")).status_code for _ in range(4)]

    assert statuses == [200, 200, 429, 429]


@pytest.mark.asyncio
async def test_rate_limit_skips_health(client, tight_limit):
    statuses = [(await client.get("/health")).status_code for _ in range(4)]

    assert statuses == [200, 200, 200, 200]


@pytest.mark.asyncio
async def test_rate_limit_disabled_by_default(client):
    statuses = [(await client.get("/api/v1/tiers")).status_code for _ in range(4)]

    assert statuses == [200, 200, 200, 200]


@pytest.mark.asyncio
async def test_production_security_headers(production_client):
    response = await production_client.get("/health")

    assert response.status_code == 200
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["strict-transport-security"].startswith("max-age=")
    assert response.headers["content-security-policy"] == "default-src 'self'"


@pytest.mark.asyncio
async def test_development_has_no_security_headers(client):
    response = await client.get("/health")

    assert "x-frame-options" not in response.headers


@pytest.mark.asyncio
async def test_production_cors_allows_configured_origin(production_client):
    response = await production_client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


@pytest.mark.asyncio
async def test_production_cors_rejects_other_origin(production_client):
    response = await production_client.get("/health", headers={"Origin": "https://elsewhere.example"})

    assert "access-control-allow-origin" not in response.headers


@pytest.mark.asyncio
async def test_production_disables_docs(production_client):
    assert (await production_client.get("/docs")).status_code == 404
