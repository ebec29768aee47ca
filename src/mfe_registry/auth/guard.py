"""
mfe_registry.auth.guard

Authorization guard over raw `Authorization` header values.

Responsibilities:
- Extract a bearer credential from a header value.
- Authenticate it via the token service without leaking the failure cause.
- Enforce role membership for admin-only operations.
"""

from __future__ import annotations

from mfe_registry.auth.jwt import InvalidCredential, TokenService
from mfe_registry.auth.models import Claims
from mfe_registry.errors import Forbidden, MissingCredential, Unauthenticated

BEARER_PREFIX = "Bearer "


class AuthorizationGuard:
    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def extract_credential(self, raw_header: str | None) -> str:
        if not raw_header or not raw_header.startswith(BEARER_PREFIX):
            raise MissingCredential("Missing bearer token")
        token = raw_header[len(BEARER_PREFIX) :].strip()
        if not token:
            raise MissingCredential("Missing bearer token")
        return token

    def authenticate(self, raw_header: str | None) -> Claims:
        token = self.extract_credential(raw_header)
        try:
            return self._tokens.validate(token)
        except InvalidCredential as e:
            # Malformed, badly signed and expired tokens all look the same from outside.
            raise Unauthenticated("Invalid bearer token") from e

    def require_role(self, raw_header: str | None, role: str) -> Claims:
        claims = self.authenticate(raw_header)
        if not claims.has_role(role):
            raise Forbidden(f"{role} role required")
        return claims


# --- Module Notes -----------------------------------------------------------
# FastAPI wiring for this guard lives in `auth.deps`; telemetry ingestion calls
# `authenticate` directly for best-effort user resolution.
