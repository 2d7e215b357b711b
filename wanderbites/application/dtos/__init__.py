"""Application DTOs (no dependency on HTTP or the content store)."""

from wanderbites.application.dtos.content import (
    AuthorPage,
    CategoryPage,
    HomePage,
    PostPage,
)
from wanderbites.application.dtos.search import (
    GENERIC_ERROR_MESSAGE,
    SearchFilterSet,
    SearchPage,
    SearchRequest,
    SearchResultState,
)

__all__ = [
    "AuthorPage",
    "CategoryPage",
    "GENERIC_ERROR_MESSAGE",
    "HomePage",
    "PostPage",
    "SearchFilterSet",
    "SearchPage",
    "SearchRequest",
    "SearchResultState",
]
