"""
mfe_registry.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Expose the app-owned `AuthorizationGuard` to handlers.
- Enforce role membership via reusable dependency factories.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from mfe_registry.auth.guard import AuthorizationGuard
from mfe_registry.auth.models import ADMIN_ROLE, Claims
from mfe_registry.errors import Forbidden, Unauthenticated
from mfe_registry.observability.logging import get_logger

log = get_logger(__name__)


def get_guard(request: Request) -> AuthorizationGuard:
    # Created once per app in `api.app.create_app`.
    return request.app.state.guard  # type: ignore[no-any-return]


def require_role(role: str):
    def _dep(
        authorization: str | None = Header(default=None),
        guard: AuthorizationGuard = Depends(get_guard),
    ) -> Claims:
        try:
            return guard.require_role(authorization, role)
        except (Unauthenticated, Forbidden) as e:
            log.warning("auth_rejected", reason=type(e).__name__, required_role=role)
            raise

    return _dep


require_admin = require_role(ADMIN_ROLE)


# --- Module Notes -----------------------------------------------------------
# Guard failures propagate as domain errors and are rendered by the handlers registered
# in `api.app`, so 401/403 bodies look the same on every route.
