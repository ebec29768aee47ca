"""
mfe_registry.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Hand the app-owned shared state (token service, flag store, registry assembler,
  telemetry buffer) to request handlers.
- Expose the request-scoped `RequestContext` attached by the middleware.
"""

from __future__ import annotations

from fastapi import Request

from mfe_registry.auth.jwt import TokenService
from mfe_registry.observability.context import RequestContext
from mfe_registry.registry.assembler import RegistryAssembler
from mfe_registry.registry.flags import CanaryFlagStore
from mfe_registry.telemetry.buffer import TelemetryBuffer


def token_service(request: Request) -> TokenService:
    return request.app.state.tokens  # type: ignore[no-any-return]


def flag_store(request: Request) -> CanaryFlagStore:
    return request.app.state.flags  # type: ignore[no-any-return]


def registry_assembler(request: Request) -> RegistryAssembler:
    return request.app.state.assembler  # type: ignore[no-any-return]


def telemetry_buffer(request: Request) -> TelemetryBuffer:
    return request.app.state.telemetry  # type: ignore[no-any-return]


def request_context(request: Request) -> RequestContext:
    # Set by RequestContextMiddleware; derived on the spot if the app runs without it.
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext.from_headers(request.headers)
        request.state.context = context
    return context


# --- Module Notes -----------------------------------------------------------
# All shared state is created per app in `api.app.create_app` (no module-level
# singletons), so independent apps in one process never share flags or telemetry.
