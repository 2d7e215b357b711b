"""DTOs for search: filter set, request, repository page, and result state."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from wanderbites.domain.entities.content import ContentRecord
from wanderbites.shared.enums import SearchStatus

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


@dataclass(frozen=True)
class SearchFilterSet:
    """Normalized search constraints. None means "not constrained".

    Build with query_normalizer.normalize(); fields are never empty strings.
    """

    text: str | None = None
    region: str | None = None
    rating: int | None = None
    tag: str | None = None
    category: str | None = None  # category slug

    def is_empty(self) -> bool:
        """True when no field is set (callers must not query the store)."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Only the fields that are set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class SearchRequest:
    """A filter set tagged with the orchestrator sequence that issued it."""

    filters: SearchFilterSet
    sequence: int


@dataclass(frozen=True)
class SearchPage:
    """Repository search result: ordered records and their total count."""

    records: list[ContentRecord] = field(default_factory=list)
    total_count: int = 0


@dataclass(frozen=True)
class SearchResultState:
    """Authoritative result state of one search surface."""

    records: tuple[ContentRecord, ...] = ()
    total_count: int = 0
    status: SearchStatus = SearchStatus.IDLE
    last_filters: SearchFilterSet | None = None
    error: str | None = None
    sequence: int = 0

    @classmethod
    def idle(cls, filters: SearchFilterSet | None = None, sequence: int = 0) -> SearchResultState:
        return cls(last_filters=filters, sequence=sequence)

    def loading(self, request: SearchRequest) -> SearchResultState:
        """Keep the current records visible while the new request runs."""
        return replace(
            self,
            status=SearchStatus.LOADING,
            last_filters=request.filters,
            error=None,
            sequence=request.sequence,
        )

    def succeeded(self, request: SearchRequest, page: SearchPage) -> SearchResultState:
        return SearchResultState(
            records=tuple(page.records),
            total_count=page.total_count,
            status=SearchStatus.SUCCESS,
            last_filters=request.filters,
            sequence=request.sequence,
        )

    def failed(self, request: SearchRequest, message: str = GENERIC_ERROR_MESSAGE) -> SearchResultState:
        return replace(
            self,
            status=SearchStatus.ERROR,
            last_filters=request.filters,
            error=message,
            sequence=request.sequence,
        )
