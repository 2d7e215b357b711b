"""Content page use cases: home, post, author, and category read models."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from wanderbites.application.dtos.content import (
    AuthorPage,
    CategoryPage,
    HomePage,
    PostPage,
)
from wanderbites.domain.entities.content import ContentRecord
from wanderbites.domain.exceptions import ContentNotFoundException
from wanderbites.shared.enums import ContentKind, PostStatus

if TYPE_CHECKING:
    from wanderbites.application.interfaces.repositories import IContentRepository

RELATED_POSTS_LIMIT = 2


def pick_featured(posts: list[ContentRecord]) -> tuple[ContentRecord | None, list[ContentRecord]]:
    """Split posts into (featured, rest).

    The featured post is the first one with post_status "featured". It is
    removed from the rest unless it is the only post.
    """
    featured = next(
        (p for p in posts if p.post_status_key == PostStatus.FEATURED.value), None
    )
    if featured is None:
        return None, posts
    rest = [p for p in posts if p.id != featured.id]
    return featured, rest or [featured]


class ContentQueryService:
    """Read-only queries behind the content pages.

    Missing slugs raise ContentNotFoundException (404 at the API); the
    repository itself reports them as None.
    """

    def __init__(self, content_repo: "IContentRepository") -> None:
        self.content_repo = content_repo

    async def list_posts(self) -> list[ContentRecord]:
        return await self.content_repo.list_all(ContentKind.BLOG_POSTS)

    async def list_authors(self) -> list[ContentRecord]:
        return await self.content_repo.list_all(ContentKind.AUTHORS)

    async def list_categories(self) -> list[ContentRecord]:
        return await self.content_repo.list_all(ContentKind.CATEGORIES)

    async def get_home(self) -> HomePage:
        """Posts, categories and authors are fetched concurrently."""
        posts, categories, authors = await asyncio.gather(
            self.list_posts(), self.list_categories(), self.list_authors()
        )
        featured, rest = pick_featured(posts)
        return HomePage(
            featured_post=featured,
            posts=rest,
            categories=categories,
            authors=authors,
        )

    async def _require(self, kind: ContentKind, slug: str) -> ContentRecord:
        record = await self.content_repo.get_by_slug(kind, slug)
        if record is None:
            raise ContentNotFoundException(kind.value, slug)
        return record

    async def get_post(self, slug: str) -> PostPage:
        """Post plus up to two other posts, newest first."""
        post = await self._require(ContentKind.BLOG_POSTS, slug)
        others = [p for p in await self.list_posts() if p.id != post.id]
        return PostPage(post=post, related_posts=others[:RELATED_POSTS_LIMIT])

    async def get_author(self, slug: str) -> AuthorPage:
        author = await self._require(ContentKind.AUTHORS, slug)
        posts = await self.content_repo.list_by_relation(ContentKind.AUTHORS, author.id)
        return AuthorPage(author=author, posts=posts)

    async def get_category(self, slug: str) -> CategoryPage:
        category = await self._require(ContentKind.CATEGORIES, slug)
        posts = await self.content_repo.list_by_relation(
            ContentKind.CATEGORIES, category.id
        )
        return CategoryPage(category=category, posts=posts)
