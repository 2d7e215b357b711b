"""Request context management using contextvars.

Holds the request and correlation IDs for the current request so log
records can carry them. Context is scoped to the current async task.
"""

import logging
from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_request_ids(request_id: str | None, correlation_id: str | None) -> None:
    """Set request and correlation IDs for the current request."""
    _request_id.set(request_id)
    _correlation_id.set(correlation_id)


def get_request_id() -> str | None:
    return _request_id.get()


class RequestContextLogFilter(logging.Filter):
    """Adds request_id and correlation_id attributes ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        record.correlation_id = _correlation_id.get() or "-"
        return True
