"""
mfe_registry.api.routers.spa

Single-page-app forwarding for the built shell.

Responsibilities:
- Serve `index.html` for client-side routes (no dot in the path).
- Serve static assets that exist under the configured directory.
- Keep `/api` paths out of the SPA fallback.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from starlette.responses import FileResponse

from mfe_registry.errors import NotFound

INDEX_FILE = "index.html"


def build_spa_router(static_dir: str | Path) -> APIRouter:
    root = Path(static_dir).resolve()
    router = APIRouter(include_in_schema=False)

    @router.get("/{full_path:path}")
    async def forward_spa_routes(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise NotFound("Not found")

        if "." in full_path:
            asset = (root / full_path).resolve()
            if asset.is_relative_to(root) and asset.is_file():
                return FileResponse(asset)
            raise NotFound("Not found")

        index = root / INDEX_FILE
        if not index.is_file():
            raise NotFound("Not found")
        return FileResponse(index)

    return router


# --- Module Notes -----------------------------------------------------------
# Mounted last in `api.app.create_app` so every API route matches first.
