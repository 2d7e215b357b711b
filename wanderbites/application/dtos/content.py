"""DTOs for content pages (home, post, author, category read models)."""

from dataclasses import dataclass, field

from wanderbites.domain.entities.content import ContentRecord


@dataclass(frozen=True)
class HomePage:
    """Landing page: featured post, latest posts, categories, authors."""

    featured_post: ContentRecord | None
    posts: list[ContentRecord] = field(default_factory=list)
    categories: list[ContentRecord] = field(default_factory=list)
    authors: list[ContentRecord] = field(default_factory=list)


@dataclass(frozen=True)
class PostPage:
    post: ContentRecord
    related_posts: list[ContentRecord] = field(default_factory=list)


@dataclass(frozen=True)
class AuthorPage:
    author: ContentRecord
    posts: list[ContentRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryPage:
    category: ContentRecord
    posts: list[ContentRecord] = field(default_factory=list)
