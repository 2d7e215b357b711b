"""Search API schemas."""

from typing import Any

from pydantic import BaseModel, Field

from wanderbites.schemas.content import ContentRecordResponse


class SearchResponse(BaseModel):
    """GET /search response: matching posts, newest first."""

    posts: list[ContentRecordResponse] = Field(default_factory=list)
    total: int = 0
    filters: dict[str, Any] = Field(
        default_factory=dict, description="Normalized filters that were applied"
    )


class SearchErrorResponse(BaseModel):
    """Body returned with HTTP 500 when the search itself failed."""

    posts: list[ContentRecordResponse] = Field(default_factory=list)
    total: int = 0
    error: str = "Search failed"


class SearchMessage(BaseModel):
    """One client frame on the search WebSocket. Missing keys mean "no filter"."""

    q: str | None = None
    region: str | None = None
    rating: str | int | None = None
    tag: str | None = None
    category: str | None = None
    immediate: bool = Field(
        default=False, description="Search now instead of after the debounce delay"
    )
