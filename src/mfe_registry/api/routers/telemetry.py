"""
mfe_registry.api.routers.telemetry

Client telemetry collection and admin listing.

Responsibilities:
- Accept telemetry events from any caller (authenticated or not).
- Expose the buffered events, newest-first, to admins.
"""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Header
from pydantic import JsonValue, field_validator

from mfe_registry.api.deps import request_context, telemetry_buffer
from mfe_registry.api.models import CamelModel
from mfe_registry.auth.deps import get_guard, require_admin
from mfe_registry.auth.guard import AuthorizationGuard
from mfe_registry.observability.context import RequestContext
from mfe_registry.observability.logging import get_logger
from mfe_registry.telemetry.buffer import TelemetryBuffer, TelemetryRecord
from mfe_registry.telemetry.ingest import CallerHeaders, TelemetryEvent, build_record

router = APIRouter(prefix="/api", tags=["telemetry"])

log = get_logger(__name__)


class TelemetryEventRequest(CamelModel):
    event_type: str | None = None
    remote_id: str | None = None
    route_id: str | None = None
    level: str | None = None
    duration_ms: int | None = None
    message: str | None = None
    metadata: dict[str, JsonValue] | None = None

    @field_validator("duration_ms", mode="before")
    @classmethod
    def _truncate_fractional_ms(cls, v: object) -> object:
        # Browsers report performance.now() deltas with sub-millisecond precision.
        if isinstance(v, float) and math.isfinite(v):
            return int(v)
        return v

    def to_event(self) -> TelemetryEvent:
        return TelemetryEvent(
            event_type=self.event_type,
            remote_id=self.remote_id,
            route_id=self.route_id,
            level=self.level,
            duration_ms=self.duration_ms,
            message=self.message,
            metadata=self.metadata,
        )


class TelemetryRecordResponse(CamelModel):
    timestamp: str
    correlation_id: str
    request_id: str
    session_id: str
    user_id: str
    event_type: str
    remote_id: str | None
    route_id: str | None
    level: str
    duration_ms: int | None
    message: str | None
    metadata: dict[str, JsonValue] | None

    @classmethod
    def of(cls, r: TelemetryRecord) -> TelemetryRecordResponse:
        return cls(
            timestamp=r.timestamp,
            correlation_id=r.correlation_id,
            request_id=r.request_id,
            session_id=r.session_id,
            user_id=r.user_id,
            event_type=r.event_type,
            remote_id=r.remote_id,
            route_id=r.route_id,
            level=r.level,
            duration_ms=r.duration_ms,
            message=r.message,
            metadata=r.metadata,
        )


@router.post("/telemetry")
async def collect_telemetry(
    body: TelemetryEventRequest | None = None,
    x_session_id: str | None = Header(default=None),
    x_request_id: str | None = Header(default=None),
    x_correlation_id: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
    context: RequestContext = Depends(request_context),
    guard: AuthorizationGuard = Depends(get_guard),
    buffer: TelemetryBuffer = Depends(telemetry_buffer),
) -> dict[str, str]:
    event = body.to_event() if body is not None else TelemetryEvent()
    record = build_record(
        event,
        CallerHeaders(
            correlation_id=x_correlation_id,
            request_id=x_request_id,
            session_id=x_session_id,
            user_id=x_user_id,
            authorization=authorization,
        ),
        context=context,
        guard=guard,
    )
    buffer.append(record)
    log.info(
        "telemetry_received",
        event_type=record.event_type,
        remote_id=record.remote_id or "",
        route_id=record.route_id or "",
        duration_ms=record.duration_ms or 0,
        user_id=record.user_id,
    )
    return {"status": "accepted"}


@router.get(
    "/admin/telemetry",
    response_model=list[TelemetryRecordResponse],
    dependencies=[Depends(require_admin)],
)
async def list_telemetry(
    buffer: TelemetryBuffer = Depends(telemetry_buffer),
) -> list[TelemetryRecordResponse]:
    return [TelemetryRecordResponse.of(r) for r in buffer.snapshot()]
