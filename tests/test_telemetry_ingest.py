from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from mfe_registry.auth.guard import AuthorizationGuard
from mfe_registry.auth.jwt import JwtConfig, TokenService
from mfe_registry.observability.context import RequestContext
from mfe_registry.telemetry.ingest import CallerHeaders, TelemetryEvent, build_record

CFG = JwtConfig(
    alg="HS256",
    issuer="app-registry",
    audience="mfe-shell",
    secret="ingest-test-secret-with-at-least-32-bytes",
)
CONTEXT = RequestContext(correlation_id="corr-ctx", request_id="req-ctx", session_id="session-ctx")
FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(CFG)


@pytest.fixture
def guard(tokens: TokenService) -> AuthorizationGuard:
    return AuthorizationGuard(tokens)


def _build(event: TelemetryEvent, headers: CallerHeaders, guard: AuthorizationGuard):
    return build_record(event, headers, context=CONTEXT, guard=guard, clock=lambda: FIXED_NOW)


def test_defaults_for_a_bare_event(guard: AuthorizationGuard) -> None:
    record = _build(TelemetryEvent(), CallerHeaders(), guard)

    assert record.timestamp == FIXED_NOW.isoformat()
    assert record.event_type == "unknown_event"
    assert record.level == "INFO"
    assert record.user_id == "anonymous"
    assert (record.correlation_id, record.request_id, record.session_id) == (
        "corr-ctx",
        "req-ctx",
        "session-ctx",
    )


def test_blank_values_fall_back(guard: AuthorizationGuard) -> None:
    record = _build(
        TelemetryEvent(event_type="  ", level=""),
        CallerHeaders(correlation_id=" ", request_id="", session_id="\t", user_id=" "),
        guard,
    )

    assert record.event_type == "unknown_event"
    assert record.level == "INFO"
    assert record.correlation_id == "corr-ctx"
    assert record.session_id == "session-ctx"
    assert record.user_id == "anonymous"


def test_caller_headers_win_over_context(guard: AuthorizationGuard) -> None:
    record = _build(
        TelemetryEvent(event_type="remote_load_failed", level="ERROR", remote_id="remote-billing"),
        CallerHeaders(correlation_id="corr-client", request_id="req-client", session_id="s-1"),
        guard,
    )

    assert (record.correlation_id, record.request_id, record.session_id) == (
        "corr-client",
        "req-client",
        "s-1",
    )
    assert record.event_type == "remote_load_failed"
    assert record.level == "ERROR"
    assert record.remote_id == "remote-billing"


def test_user_header_wins_over_token(guard: AuthorizationGuard, tokens: TokenService) -> None:
    headers = CallerHeaders(
        user_id="u-42", authorization=f"Bearer {tokens.issue('admin', ['ADMIN'])}"
    )
    assert _build(TelemetryEvent(), headers, guard).user_id == "u-42"


def test_valid_token_resolves_subject(guard: AuthorizationGuard, tokens: TokenService) -> None:
    headers = CallerHeaders(authorization=f"Bearer {tokens.issue('jane', ['USER'])}")
    assert _build(TelemetryEvent(), headers, guard).user_id == "jane"


@pytest.mark.parametrize("authorization", ["Bearer garbage", "Basic abc", "Bearer "])
def test_bad_credentials_resolve_to_anonymous(guard: AuthorizationGuard, authorization: str) -> None:
    headers = CallerHeaders(authorization=authorization)
    assert _build(TelemetryEvent(), headers, guard).user_id == "anonymous"


def test_expired_token_resolves_to_anonymous(guard: AuthorizationGuard) -> None:
    stale = TokenService(CFG, clock=lambda: datetime.now(tz=UTC) - timedelta(days=2))
    headers = CallerHeaders(authorization=f"Bearer {stale.issue('jane', ['USER'])}")
    assert _build(TelemetryEvent(), headers, guard).user_id == "anonymous"


def test_metadata_is_copied(guard: AuthorizationGuard) -> None:
    metadata = {"attempt": 2, "tags": ["a", "b"], "nested": {"ok": True}}

    record = _build(TelemetryEvent(metadata=metadata), CallerHeaders(), guard)
    metadata["attempt"] = 3

    assert record.metadata == {"attempt": 2, "tags": ["a", "b"], "nested": {"ok": True}}
