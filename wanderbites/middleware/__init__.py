"""HTTP/WebSocket middleware. Applied in wanderbites.main."""

from wanderbites.middleware.request_context import RequestContextMiddleware
from wanderbites.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestContextMiddleware", "TimeoutMiddleware"]
