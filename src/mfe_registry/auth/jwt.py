"""
mfe_registry.auth.jwt

JWT issuing and validation (the token service).

Responsibilities:
- Issue signed, claims-bearing credentials (sub/roles/iat/exp + iss/aud).
- Decode and validate credentials with strict structural requirements.
- Enforce freshness explicitly: a credential is valid only within [iat, exp).

Note:
- Issuer and verifier are the same process, so a shared HS256 secret is sufficient.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from mfe_registry.auth.models import Claims
from mfe_registry.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str
    ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            ttl=timedelta(minutes=settings.jwt_expiration_minutes),
        )


class InvalidCredential(Exception):
    pass


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class TokenService:
    """
    Stateless issuer/verifier. There is no revocation list: a token stays valid
    until it expires.
    """

    def __init__(self, cfg: JwtConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._cfg = cfg
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._cfg.ttl

    def issue(self, subject: str, roles: Iterable[str]) -> str:
        issued_at = int(self._clock().timestamp())
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "sub": subject,
            "roles": list(roles),
            "iat": issued_at,
            "exp": issued_at + int(self._cfg.ttl.total_seconds()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)

    def validate(self, token: str) -> Claims:
        try:
            # Signature, iss and aud are checked by PyJWT; time bounds are checked below
            # against our own clock.
            payload = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={
                    "require": ["exp", "iat", "iss", "aud", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except InvalidTokenError as e:
            raise InvalidCredential(str(e)) from e

        claims = _claims_from_payload(payload)
        now = self._clock()
        if now < claims.issued_at:
            raise InvalidCredential("token is not yet valid")
        if now >= claims.expires_at:
            raise InvalidCredential("token has expired")
        return claims


def _claims_from_payload(payload: dict[str, Any]) -> Claims:
    subject = payload.get("sub")
    roles_raw = payload.get("roles")
    if not isinstance(subject, str) or not subject:
        raise InvalidCredential("invalid subject")
    if not isinstance(roles_raw, list) or not all(isinstance(r, str) for r in roles_raw):
        raise InvalidCredential("invalid roles")

    try:
        issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise InvalidCredential("invalid timestamps") from e
    if expires_at <= issued_at:
        raise InvalidCredential("invalid timestamps")

    return Claims(
        subject=subject,
        roles=frozenset(roles_raw),
        issued_at=issued_at,
        expires_at=expires_at,
    )


# --- Module Notes -----------------------------------------------------------
# Callers outside the auth package should go through `auth.guard.AuthorizationGuard`,
# which collapses every `InvalidCredential` into one outward-facing error.
