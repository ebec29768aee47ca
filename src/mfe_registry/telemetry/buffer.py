"""
mfe_registry.telemetry.buffer

Bounded, thread-safe ring buffer of client telemetry records.

Responsibilities:
- Keep the most recent N records, newest-first.
- Evict the oldest record when full.
- Hand out point-in-time snapshot copies to admin readers.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from threading import Lock

from pydantic import JsonValue

DEFAULT_MAX_EVENTS = 500


@dataclass(frozen=True, slots=True)
class TelemetryRecord:
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


class TelemetryBuffer:
    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS) -> None:
        if max_events < 1:
            raise ValueError("max_events must be positive")
        self._lock = Lock()
        # appendleft on a full deque drops the rightmost (oldest) entry in the same step.
        self._events: deque[TelemetryRecord] = deque(maxlen=max_events)

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    def append(self, record: TelemetryRecord) -> None:
        with self._lock:
            self._events.appendleft(record)

    def snapshot(self) -> list[TelemetryRecord]:
        with self._lock:
            return list(self._events)
