from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from mfe_registry.api.app import create_app
from mfe_registry.settings import Settings


@pytest.fixture
def spa_dir(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text("<html>shell</html>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "index.js").write_text("console.log('shell')")
    return tmp_path


def _client(settings: Settings) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=create_app(settings=settings))
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_client_routes_forward_to_index(settings: Settings, spa_dir: Path) -> None:
    async with _client(settings.model_copy(update={"spa_static_dir": str(spa_dir)})) as client:
        for path in ("/", "/accounts", "/admin/canary"):
            r = await client.get(path)
            assert r.status_code == 200, path
            assert r.text == "<html>shell</html>"


@pytest.mark.asyncio
async def test_assets_are_served_and_missing_files_are_404(
    settings: Settings, spa_dir: Path
) -> None:
    async with _client(settings.model_copy(update={"spa_static_dir": str(spa_dir)})) as client:
        asset = await client.get("/assets/index.js")
        missing = await client.get("/assets/missing.js")

    assert asset.status_code == 200
    assert asset.text == "console.log('shell')"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_api_paths_never_fall_through(settings: Settings, spa_dir: Path) -> None:
    async with _client(settings.model_copy(update={"spa_static_dir": str(spa_dir)})) as client:
        unknown = await client.get("/api/unknown")
        bare = await client.get("/api")
        registry = await client.get("/api/registry")

    assert unknown.status_code == 404
    assert bare.status_code == 404
    assert registry.status_code == 200


@pytest.mark.asyncio
async def test_only_get_is_forwarded(settings: Settings, spa_dir: Path) -> None:
    async with _client(settings.model_copy(update={"spa_static_dir": str(spa_dir)})) as client:
        post_client_route = await client.post("/accounts")
        put_api_route = await client.put("/api/registry")

    assert post_client_route.status_code == 405
    # A wrong method on a real API route stays a 405 rather than a SPA 404.
    assert put_api_route.status_code == 405


@pytest.mark.asyncio
async def test_spa_forwarding_is_off_without_static_dir(settings: Settings) -> None:
    async with _client(settings) as client:
        r = await client.get("/accounts")

    assert r.status_code == 404
