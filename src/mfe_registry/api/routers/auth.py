from __future__ import annotations

from fastapi import APIRouter, Depends

from mfe_registry.api.deps import token_service
from mfe_registry.api.models import CamelModel
from mfe_registry.auth.jwt import TokenService
from mfe_registry.auth.models import ADMIN_ROLE, USER_ROLE
from mfe_registry.errors import ValidationError
from mfe_registry.observability.logging import get_logger

router = APIRouter(prefix="/api/auth", tags=["auth"])

log = get_logger(__name__)

TOKEN_TYPE = "Bearer"


class LoginRequest(CamelModel):
    username: str | None = None
    # Accepted for client compatibility; the demo login does not check passwords.
    password: str | None = None


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = TOKEN_TYPE
    expires_in_seconds: int
    roles: list[str]


def roles_for(username: str) -> list[str]:
    if username.lower() == "admin":
        return [ADMIN_ROLE, USER_ROLE]
    return [USER_ROLE]


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest | None = None,
    tokens: TokenService = Depends(token_service),
) -> LoginResponse:
    if body is None or body.username is None or not body.username.strip():
        raise ValidationError("username is required")

    roles = roles_for(body.username)
    token = tokens.issue(body.username, roles)
    log.info("auth_login_issued", username=body.username, roles=roles)
    return LoginResponse(
        access_token=token,
        expires_in_seconds=int(tokens.ttl.total_seconds()),
        roles=roles,
    )
