"""
mfe_registry.telemetry.ingest

Turns a client-reported telemetry event into a `TelemetryRecord`.

Responsibilities:
- Resolve correlation ids from caller headers, falling back to the request context.
- Resolve the reporting user without ever rejecting the event.
- Apply defaults for event type and severity level.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import JsonValue

from mfe_registry.auth.guard import AuthorizationGuard
from mfe_registry.errors import Unauthenticated
from mfe_registry.observability.context import RequestContext, non_blank, value_or_default
from mfe_registry.observability.logging import get_logger
from mfe_registry.telemetry.buffer import TelemetryRecord

log = get_logger(__name__)

ANONYMOUS_USER = "anonymous"
DEFAULT_EVENT_TYPE = "unknown_event"
DEFAULT_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class TelemetryEvent:
    event_type: str | None = None
    remote_id: str | None = None
    route_id: str | None = None
    level: str | None = None
    duration_ms: int | None = None
    message: str | None = None
    metadata: dict[str, JsonValue] | None = None


@dataclass(frozen=True, slots=True)
class CallerHeaders:
    correlation_id: str | None = None
    request_id: str | None = None
    session_id: str | None = None
    user_id: str | None = None
    authorization: str | None = None


def resolve_user(
    *, user_header: str | None, authorization: str | None, guard: AuthorizationGuard
) -> str:
    explicit = non_blank(user_header)
    if explicit is not None:
        return explicit
    if non_blank(authorization) is None:
        return ANONYMOUS_USER
    try:
        return guard.authenticate(authorization).subject
    except Unauthenticated as e:
        # Ingestion stays open to unauthenticated clients; a bad token only loses attribution.
        log.debug("telemetry_user_unresolved", reason=e.detail)
        return ANONYMOUS_USER


def build_record(
    event: TelemetryEvent,
    headers: CallerHeaders,
    *,
    context: RequestContext,
    guard: AuthorizationGuard,
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC),
) -> TelemetryRecord:
    return TelemetryRecord(
        timestamp=clock().isoformat(),
        correlation_id=value_or_default(headers.correlation_id, context.correlation_id),
        request_id=value_or_default(headers.request_id, context.request_id),
        session_id=value_or_default(headers.session_id, context.session_id),
        user_id=resolve_user(
            user_header=headers.user_id,
            authorization=headers.authorization,
            guard=guard,
        ),
        event_type=value_or_default(event.event_type, DEFAULT_EVENT_TYPE),
        remote_id=event.remote_id,
        route_id=event.route_id,
        level=value_or_default(event.level, DEFAULT_LEVEL),
        duration_ms=event.duration_ms,
        message=event.message,
        metadata=dict(event.metadata) if event.metadata is not None else None,
    )


# --- Module Notes -----------------------------------------------------------
# The request context always carries ids (the middleware generates them when headers
# are missing), so every record is attributable even for bare clients.
