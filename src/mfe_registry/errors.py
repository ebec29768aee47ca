"""
mfe_registry.errors

Domain error taxonomy shared by the core components and the HTTP layer.

Responsibilities:
- Name the failure classes surfaced to callers (validation, authn, authz, lookup).
- Carry the HTTP status each class maps to, so the API layer renders them uniformly.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)


class RegistryError(Exception):
    status_code: int = HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(RegistryError):
    """Malformed or out-of-range input."""

    status_code = HTTP_400_BAD_REQUEST


class Unauthenticated(RegistryError):
    """Absent or invalid bearer credential. The cause is never exposed."""

    status_code = HTTP_401_UNAUTHORIZED


class MissingCredential(Unauthenticated):
    pass


class Forbidden(RegistryError):
    status_code = HTTP_403_FORBIDDEN


class NotFound(RegistryError):
    status_code = HTTP_404_NOT_FOUND


# --- Module Notes -----------------------------------------------------------
# Handlers for these live in `api.app.create_app`; core modules raise them and never
# import FastAPI.
