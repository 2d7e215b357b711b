"""Content API schemas (posts, authors, categories and the home page)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from wanderbites.application.dtos.content import (
    AuthorPage,
    CategoryPage,
    HomePage,
    PostPage,
)
from wanderbites.domain.entities.content import ContentRecord


class ContentRecordResponse(BaseModel):
    """A content record as stored in Cosmic (posts embed author and categories)."""

    id: str
    slug: str
    title: str
    type: str = Field(..., description="blog-posts | authors | categories")
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None
    modified_at: str | None = None

    @classmethod
    def from_record(cls, record: ContentRecord) -> ContentRecordResponse:
        return cls(**record.to_dict())


def _many(records: list[ContentRecord]) -> list[ContentRecordResponse]:
    return [ContentRecordResponse.from_record(r) for r in records]


class HomeResponse(BaseModel):
    """Landing page: featured post plus recent posts, categories and authors."""

    featured_post: ContentRecordResponse | None = None
    posts: list[ContentRecordResponse]
    categories: list[ContentRecordResponse]
    authors: list[ContentRecordResponse]

    @classmethod
    def from_page(cls, page: HomePage) -> HomeResponse:
        return cls(
            featured_post=(
                ContentRecordResponse.from_record(page.featured_post)
                if page.featured_post is not None
                else None
            ),
            posts=_many(page.posts),
            categories=_many(page.categories),
            authors=_many(page.authors),
        )


class PostDetailResponse(BaseModel):
    post: ContentRecordResponse
    related_posts: list[ContentRecordResponse]

    @classmethod
    def from_page(cls, page: PostPage) -> PostDetailResponse:
        return cls(
            post=ContentRecordResponse.from_record(page.post),
            related_posts=_many(page.related_posts),
        )


class AuthorDetailResponse(BaseModel):
    author: ContentRecordResponse
    posts: list[ContentRecordResponse]

    @classmethod
    def from_page(cls, page: AuthorPage) -> AuthorDetailResponse:
        return cls(
            author=ContentRecordResponse.from_record(page.author),
            posts=_many(page.posts),
        )


class CategoryDetailResponse(BaseModel):
    category: ContentRecordResponse
    posts: list[ContentRecordResponse]

    @classmethod
    def from_page(cls, page: CategoryPage) -> CategoryDetailResponse:
        return cls(
            category=ContentRecordResponse.from_record(page.category),
            posts=_many(page.posts),
        )


def to_response_list(records: list[ContentRecord]) -> list[ContentRecordResponse]:
    """Map records to response models (list endpoints)."""
    return _many(records)
