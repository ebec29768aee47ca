"""
mfe_registry.api.app

FastAPI app factory for the app registry service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create the shared in-process state (token service, catalog, flag store,
  telemetry buffer) and own it on `app.state`.
- Map domain errors to HTTP responses in one place.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from mfe_registry import __version__
from mfe_registry.api.routers.auth import router as auth_router
from mfe_registry.api.routers.registry import router as registry_router
from mfe_registry.api.routers.spa import build_spa_router
from mfe_registry.api.routers.telemetry import router as telemetry_router
from mfe_registry.auth.guard import AuthorizationGuard
from mfe_registry.auth.jwt import JwtConfig, TokenService
from mfe_registry.errors import RegistryError
from mfe_registry.observability.context import (
    CORRELATION_ID_HEADER,
    REQUEST_ID_HEADER,
    SESSION_ID_HEADER,
    USER_ID_HEADER,
)
from mfe_registry.observability.logging import configure_logging, get_logger
from mfe_registry.observability.middleware import RequestContextMiddleware
from mfe_registry.registry.assembler import RegistryAssembler
from mfe_registry.registry.catalog import build_catalog, catalog_ids
from mfe_registry.registry.flags import CanaryFlagStore
from mfe_registry.settings import Settings
from mfe_registry.telemetry.buffer import TelemetryBuffer

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    app = FastAPI(
        title="MFE App Registry",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    tokens = TokenService(JwtConfig.from_settings(settings))
    catalog = build_catalog(settings)
    flags = CanaryFlagStore(catalog_ids(catalog))

    app.state.tokens = tokens
    app.state.guard = AuthorizationGuard(tokens)
    app.state.flags = flags
    app.state.assembler = RegistryAssembler(
        catalog=catalog, flags=flags, platform=settings.platform_name
    )
    app.state.telemetry = TelemetryBuffer(settings.telemetry_max_events)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            SESSION_ID_HEADER,
            REQUEST_ID_HEADER,
            CORRELATION_ID_HEADER,
            USER_ID_HEADER,
        ],
        expose_headers=[CORRELATION_ID_HEADER, REQUEST_ID_HEADER],
    )
    # Added last so it wraps everything, CORS preflights included.
    app.add_middleware(RequestContextMiddleware)

    _register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(registry_router)
    app.include_router(telemetry_router)
    if settings.spa_static_dir:
        app.include_router(build_spa_router(settings.spa_static_dir))

    log.info("startup", env=settings.env, remotes=len(catalog))
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RegistryError)
    async def _registry_error(_: Request, exc: RegistryError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == HTTP_401_UNAUTHORIZED else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed bodies are client errors like any other validation failure.
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )


# --- Module Notes -----------------------------------------------------------
# This file is the composition root: shared state is created here and reaches handlers
# only through `api.deps` / `auth.deps`.
