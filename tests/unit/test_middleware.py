"""Tests for the raw ASGI middleware and the request-context log filter."""

import asyncio
import json
import logging

from wanderbites.middleware import RequestContextMiddleware, TimeoutMiddleware
from wanderbites.shared.context import RequestContextLogFilter, get_request_id, set_request_ids


async def _call(app, scope: dict) -> list[dict]:
    sent: list[dict] = []

    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict) -> None:
        sent.append(message)

    await app(scope, receive, send)
    return sent


def _http_scope(headers: list[tuple[bytes, bytes]] | None = None) -> dict:
    return {"type": "http", "method": "GET", "path": "/api/v1/search", "headers": headers or []}


async def _ok_app(scope, receive, send) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"{}"})


async def test_timeout_answers_504() -> None:
    async def slow_app(scope, receive, send) -> None:
        await asyncio.sleep(1)

    sent = await _call(TimeoutMiddleware(slow_app, timeout_seconds=0.01), _http_scope())
    assert sent[0]["status"] == 504
    assert json.loads(sent[1]["body"])["error"] == "GATEWAY_TIMEOUT"


async def test_timeout_does_not_send_second_start_after_headers() -> None:
    async def stalls_mid_body(scope, receive, send) -> None:
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await asyncio.sleep(1)

    sent = await _call(TimeoutMiddleware(stalls_mid_body, timeout_seconds=0.01), _http_scope())
    assert [m["type"] for m in sent] == ["http.response.start"]


async def test_timeout_passes_fast_requests_through() -> None:
    sent = await _call(TimeoutMiddleware(_ok_app, timeout_seconds=1), _http_scope())
    assert sent[0]["status"] == 200


async def test_request_context_sets_ids_for_the_request() -> None:
    seen: dict = {}

    async def app(scope, receive, send) -> None:
        seen["request_id"] = get_request_id()
        seen["state"] = dict(scope["state"])
        await _ok_app(scope, receive, send)

    sent = await _call(
        RequestContextMiddleware(app),
        _http_scope([(b"x-request-id", b"abc-123")]),
    )
    assert seen["request_id"] == "abc-123"
    assert seen["state"] == {"request_id": "abc-123", "correlation_id": "abc-123"}
    assert (b"X-Request-ID", b"abc-123") in sent[0]["headers"]


def test_log_filter_adds_request_id() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    set_request_ids(None, None)
    RequestContextLogFilter().filter(record)
    assert record.request_id == "-"

    set_request_ids("req-1", "corr-1")
    RequestContextLogFilter().filter(record)
    assert record.request_id == "req-1"
    assert record.correlation_id == "corr-1"
    set_request_ids(None, None)
