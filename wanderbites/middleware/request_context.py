"""Request context middleware: request ID and correlation ID.

Generates or forwards X-Request-ID and X-Correlation-ID, stores both on
scope state and in contextvars (for log records), and echoes them on HTTP
responses. Client-provided values are sanitized (length + character set)
to prevent log injection. Uses raw ASGI (no BaseHTTPMiddleware) so it also
covers WebSocket connections.
"""

import re
import uuid
from typing import Callable

from wanderbites.shared.context import set_request_ids

# Safe for logging: alphanumeric, hyphen, underscore; max length to avoid abuse.
ID_MAX_LENGTH = 64
ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize_id(raw: str | None) -> str | None:
    """Return the stripped value if valid and safe, else None."""
    if not raw:
        return None
    value = raw.strip()
    return value if ID_ALLOWED_PATTERN.match(value) else None


def RequestContextMiddleware(
    app: Callable,
    request_id_header: str = "X-Request-ID",
    correlation_id_header: str = "X-Correlation-ID",
) -> Callable:
    """Attach request/correlation IDs to every HTTP request and WebSocket. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] not in ("http", "websocket"):
            await app(scope, receive, send)
            return
        request_id = _sanitize_id(_get_header(scope, request_id_header)) or str(uuid.uuid4())
        correlation_id = (
            _sanitize_id(_get_header(scope, correlation_id_header)) or request_id
        )
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id
        set_request_ids(request_id, correlation_id)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((request_id_header.encode(), request_id.encode()))
                headers.append((correlation_id_header.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
