"""Tests for security headers and rate limiter configuration."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.core import rate_limit
from src.app.core.security import SecurityHeadersMiddleware

pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy="default-src 'self'")

    @app.get("/page")
    async def page() -> dict:
        return {"ok": True}

    @app.post("/action")
    async def action() -> dict:
        return {"ok": True}

    return TestClient(app)


def test_headers_on_every_response(client: TestClient):
    response = client.get("/page")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Content-Security-Policy"] == "default-src 'self'"
    assert "Strict-Transport-Security" in response.headers
    assert "Cache-Control" not in response.headers


def test_form_actions_are_not_cached(client: TestClient):
    response = client.post("/action")

    assert response.headers["Cache-Control"] == "no-store"


def test_default_csp_allows_docs_assets():
    middleware = SecurityHeadersMiddleware(MagicMock())

    assert "cdn.jsdelivr.net" in middleware.headers["Content-Security-Policy"]


def test_limiter_disabled_in_testing():
    assert rate_limit.limiter.enabled is False


def test_limiter_enabled_outside_testing(monkeypatch):
    settings = MagicMock()
    settings.app_env = "development"
    settings.redis_url = None
    monkeypatch.setattr(rate_limit, "get_settings", lambda: settings)

    assert rate_limit.create_limiter().enabled is True
