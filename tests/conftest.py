"""
tests.conftest

Shared fixtures: test settings, a fresh app per test, and bearer headers.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from mfe_registry.api.app import create_app
from mfe_registry.settings import Settings

TEST_SECRET = "test-signing-secret-with-at-least-32-bytes"


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", jwt_secret=TEST_SECRET, log_level="WARNING")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings=settings)


@pytest.fixture
def client(app: FastAPI) -> httpx.AsyncClient:
    # Tests enter it with `async with client:`; lifespan is not needed (no startup hooks).
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def admin_headers(app: FastAPI) -> dict[str, str]:
    token = app.state.tokens.issue("admin", ["ADMIN", "USER"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(app: FastAPI) -> dict[str, str]:
    token = app.state.tokens.issue("jane", ["USER"])
    return {"Authorization": f"Bearer {token}"}
