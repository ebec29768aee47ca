"""
mfe_registry.api.__main__

Entrypoint for running the FastAPI application via `python -m mfe_registry.api`.

Responsibilities:
- Load env-driven settings and build the app.
- Start uvicorn without its own logging config (structlog owns the output).
"""

from __future__ import annotations

import uvicorn

from mfe_registry.api.app import create_app
from mfe_registry.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        # RequestContextMiddleware already emits one `http_request` line per request.
        access_log=False,
    )


if __name__ == "__main__":
    main()
