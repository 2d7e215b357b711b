"""Pytest configuration and fixtures for wanderbites.

Cosmic credentials are set in the environment before the app is imported,
so Settings validation passes without a .env file. HTTP tests run against
create_app() with the content repository replaced by an in-memory fake.
"""

import os

os.environ.setdefault("COSMIC_BUCKET_SLUG", "wanderbites-test")
os.environ.setdefault("COSMIC_READ_KEY", "test-read-key")
os.environ.setdefault("SEARCH_DEBOUNCE_MS", "20")
os.environ["REDIS_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import Callable, Iterable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from wanderbites.api.v1.dependencies import get_content_repo  # noqa: E402
from wanderbites.application.dtos.search import SearchFilterSet, SearchPage  # noqa: E402
from wanderbites.application.services.search_filters import matches_filters  # noqa: E402
from wanderbites.core.config import get_settings  # noqa: E402
from wanderbites.domain.entities.content import ContentRecord  # noqa: E402
from wanderbites.main import create_app  # noqa: E402
from wanderbites.shared.enums import ContentKind  # noqa: E402


def build_post(
    id: str,
    title: str,
    *,
    slug: str | None = None,
    published: str | None = None,
    region: str | None = None,
    rating: int | None = None,
    tags: Iterable[str] = (),
    city: str = "",
    country: str = "",
    excerpt: str = "",
    status: str = "published",
    author: dict[str, Any] | None = None,
    categories: Iterable[dict[str, Any]] = (),
) -> ContentRecord:
    """Blog post record shaped like a Cosmic object fetched with depth=1."""
    metadata: dict[str, Any] = {
        "excerpt": excerpt,
        "city": city,
        "country": country,
        "tags": list(tags),
        "post_status": {"key": status, "value": status.title()},
        "categories": list(categories),
    }
    if published is not None:
        metadata["publication_date"] = published
    if region is not None:
        metadata["region"] = {"key": region, "value": region.title()}
    if rating is not None:
        metadata["rating"] = {"key": str(rating), "value": str(rating)}
    if author is not None:
        metadata["author"] = author
    return ContentRecord.from_cosmic(
        {
            "id": id,
            "slug": slug or title.lower().replace(" ", "-"),
            "title": title,
            "type": ContentKind.BLOG_POSTS.value,
            "metadata": metadata,
        }
    )


def cosmic_object(id: str, slug: str, title: str, kind: ContentKind, **metadata: Any) -> dict:
    return {"id": id, "slug": slug, "title": title, "type": kind.value, "metadata": metadata}


MAYA = cosmic_object("a1", "maya-chen", "Maya Chen", ContentKind.AUTHORS, name="Maya Chen")
LUC = cosmic_object("a2", "luc-martin", "Luc Martin", ContentKind.AUTHORS, name="Luc Martin")
STREET_FOOD = cosmic_object("c1", "street-food", "Street Food", ContentKind.CATEGORIES, name="Street Food")
BAKERIES = cosmic_object("c2", "bakeries", "Bakeries", ContentKind.CATEGORIES, name="Bakeries")


class FakeContentRepository:
    """In-memory IContentRepository. Records calls; search can be made to fail."""

    def __init__(
        self,
        posts: Iterable[ContentRecord] = (),
        authors: Iterable[dict] = (),
        categories: Iterable[dict] = (),
    ) -> None:
        self.records: dict[ContentKind, list[ContentRecord]] = {
            ContentKind.BLOG_POSTS: list(posts),
            ContentKind.AUTHORS: [ContentRecord.from_cosmic(a) for a in authors],
            ContentKind.CATEGORIES: [ContentRecord.from_cosmic(c) for c in categories],
        }
        self.calls: list[tuple[str, Any]] = []
        self.search_error: Exception | None = None

    async def list_all(self, kind: ContentKind) -> list[ContentRecord]:
        self.calls.append(("list_all", kind))
        return list(self.records[ContentKind(kind)])

    async def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        self.calls.append(("get_by_slug", (kind, slug)))
        return next((r for r in self.records[ContentKind(kind)] if r.slug == slug), None)

    async def list_by_relation(self, kind: ContentKind, related_id: str) -> list[ContentRecord]:
        self.calls.append(("list_by_relation", (kind, related_id)))
        posts = self.records[ContentKind.BLOG_POSTS]
        if kind == ContentKind.AUTHORS:
            return [p for p in posts if p.author is not None and p.author.id == related_id]
        return [p for p in posts if related_id in {c.id for c in p.categories}]

    async def search(self, filters: SearchFilterSet) -> SearchPage:
        self.calls.append(("search", filters))
        if self.search_error is not None:
            raise self.search_error
        records = [p for p in self.records[ContentKind.BLOG_POSTS] if matches_filters(p, filters)]
        return SearchPage(records=records, total_count=len(records))

    def calls_to(self, name: str) -> list[Any]:
        return [args for op, args in self.calls if op == name]


@pytest.fixture
def make_post() -> Callable[..., ContentRecord]:
    """Factory for blog post records (see build_post)."""
    return build_post


@pytest.fixture
def sample_posts() -> list[ContentRecord]:
    """Three posts, newest first."""
    return [
        build_post(
            "p1",
            "Tokyo Ramen Crawl",
            published="2024-03-05",
            region="asia",
            rating=5,
            tags=["noodles", "street food", "late night"],
            city="Tokyo",
            country="Japan",
            excerpt="Five bowls of ramen in one night.",
            status="featured",
            author=MAYA,
            categories=[STREET_FOOD],
        ),
        build_post(
            "p2",
            "Paris Bakery Guide",
            published="2024-01-10",
            region="europe",
            rating=4,
            tags=["pastry"],
            city="Paris",
            country="France",
            excerpt="Croissants worth the queue.",
            author=LUC,
            categories=[BAKERIES],
        ),
        build_post(
            "p3",
            "Mexico City Tacos",
            published="2023-11-20",
            region="north-america",
            rating=5,
            tags=["street food"],
            city="Mexico City",
            country="Mexico",
            excerpt="Al pastor at midnight.",
            author=MAYA,
            categories=[STREET_FOOD],
        ),
    ]


@pytest.fixture
def fake_repo(sample_posts: list[ContentRecord]) -> FakeContentRepository:
    return FakeContentRepository(
        posts=sample_posts,
        authors=[MAYA, LUC],
        categories=[STREET_FOOD, BAKERIES],
    )


@pytest.fixture
def app(fake_repo: FakeContentRepository) -> FastAPI:
    """Fresh app with the content repository replaced by the fake."""
    get_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[get_content_repo] = lambda: fake_repo
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
