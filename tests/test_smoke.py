"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and the health/registry endpoints answer.
"""

from __future__ import annotations

import httpx
import pytest

from mfe_registry.api.app import create_app
from mfe_registry.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints() -> None:
    app = create_app(settings=Settings(env="test"))

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/api/registry/health")
        assert r.status_code == 200
        assert r.json() == {"status": "UP"}
        assert r.headers["x-correlation-id"].startswith("corr-")

        r = await client.get("/api/registry")
        assert r.status_code == 200
        assert r.json()["platform"] == "mfe-platform"


@pytest.mark.asyncio
async def test_openapi_is_served() -> None:
    app = create_app(settings=Settings(env="test"))

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/openapi.json")
        assert r.status_code == 200
        assert "/api/registry/admin/canary-flags/{remote_id}" in r.json()["paths"]


# --- Module Notes -----------------------------------------------------------
# Behavioral coverage lives in the per-component test modules.
