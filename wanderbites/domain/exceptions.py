"""Domain exceptions for the Wanderbites application.

Defines domain-level exceptions independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.

Cancellation of a superseded search is not an exception type here: it is
plain asyncio.CancelledError and is absorbed by the search orchestrator.
"""

from typing import Any


class WanderbitesException(Exception):
    """Base exception for all Wanderbites application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. kind, slug).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the exception handlers."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ContentNotFoundException(WanderbitesException):
    """Raised by page use cases when a record with the given slug does not exist.

    The content repository itself never raises this; it returns None.
    """

    def __init__(self, kind: str, slug: str) -> None:
        """Initialize with content kind and slug.

        Args:
            kind: Content kind (e.g. 'blog-posts', 'authors').
            slug: The slug that was not found.
        """
        super().__init__(
            f"{kind} not found: {slug}",
            "RESOURCE_NOT_FOUND",
            {"kind": kind, "slug": slug},
        )


class TransportFailure(WanderbitesException):
    """Raised when the content store cannot be reached or answers with an error.

    Covers connection errors, timeouts, non-404 error statuses and bodies
    that cannot be decoded. Never retried automatically.
    """

    def __init__(
        self,
        message: str = "Content store request failed",
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "TRANSPORT_FAILURE", details)
        self.status_code = status_code


class ValidationException(WanderbitesException):
    """Raised when input validation fails (e.g. unknown content kind)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)
