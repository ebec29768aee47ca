"""
mfe_registry.observability.context

Request-scoped correlation identifiers.

Responsibilities:
- Derive correlation/request/session ids from inbound headers, with fallbacks.
- Carry them as an explicit value attached to the request (`request.state.context`).
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass

CORRELATION_ID_HEADER = "X-Correlation-Id"
REQUEST_ID_HEADER = "X-Request-Id"
SESSION_ID_HEADER = "X-Session-Id"
USER_ID_HEADER = "X-User-Id"

UNKNOWN_SESSION_ID = "session-unknown"


def non_blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def value_or_default(value: str | None, fallback: str) -> str:
    return non_blank(value) or fallback


@dataclass(frozen=True, slots=True)
class RequestContext:
    correlation_id: str
    request_id: str
    session_id: str

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RequestContext:
        # Starlette headers are case-insensitive; plain dicts in tests use the canonical casing.
        return cls(
            correlation_id=non_blank(headers.get(CORRELATION_ID_HEADER))
            or f"corr-{uuid.uuid4()}",
            request_id=non_blank(headers.get(REQUEST_ID_HEADER)) or f"req-{uuid.uuid4()}",
            session_id=non_blank(headers.get(SESSION_ID_HEADER)) or UNKNOWN_SESSION_ID,
        )

    def as_log_fields(self) -> dict[str, str]:
        return {
            "correlation_id": self.correlation_id,
            "request_id": self.request_id,
            "session_id": self.session_id,
        }
