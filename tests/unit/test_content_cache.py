"""Tests for cache keys, the Redis cache service and the caching repository."""

import pytest
import redis.asyncio as redis

from wanderbites.core.config import get_settings
from wanderbites.infrastructure.cache import (
    CachedContentRepository,
    CacheService,
    content_list_key,
    content_relation_key,
    content_slug_key,
)
from wanderbites.shared.enums import ContentKind


class DictCache:
    """In-memory CacheProtocol."""

    def __init__(self) -> None:
        self.data: dict[str, object] = {}
        self.ttls: dict[str, int] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str):
        return self.data.get(key)

    async def set(self, key: str, value, ttl: int = 60) -> bool:
        self.data[key] = value
        self.ttls[key] = ttl
        return True


class FakeRedis:
    """Just enough of redis.asyncio.Redis for CacheService."""

    def __init__(self, fail: bool = False) -> None:
        self.store: dict[str, str] = {}
        self.fail = fail

    async def get(self, key: str):
        if self.fail:
            raise redis.ResponseError("WRONGTYPE")
        return self.store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        if self.fail:
            raise redis.ResponseError("READONLY")
        self.store[key] = value


def test_key_format() -> None:
    assert content_list_key("authors") == "content:all:authors"
    assert content_slug_key("blog-posts", "tokyo") == "content:slug:blog-posts:tokyo"
    assert content_relation_key("categories", "c1") == "content:related:categories:c1"


def test_key_components_must_not_contain_separator() -> None:
    with pytest.raises(ValueError):
        content_slug_key("blog-posts", "a:b")


async def test_cache_service_round_trips_json() -> None:
    cache = CacheService(get_settings(), redis_client=FakeRedis())
    assert cache.is_available()
    assert await cache.set("k", {"a": [1, 2]}, ttl=5)
    assert await cache.get("k") == {"a": [1, 2]}
    assert await cache.get("missing") is None


async def test_cache_service_errors_degrade_to_miss() -> None:
    cache = CacheService(get_settings(), redis_client=FakeRedis(fail=True))
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False


async def test_list_all_is_served_from_cache_on_second_call(fake_repo) -> None:
    cache = DictCache()
    repo = CachedContentRepository(fake_repo, cache, ttl=30)

    first = await repo.list_all(ContentKind.AUTHORS)
    second = await repo.list_all(ContentKind.AUTHORS)

    assert first == second
    assert len(fake_repo.calls_to("list_all")) == 1
    assert cache.ttls["content:all:authors"] == 30


async def test_cached_posts_keep_embedded_relations(fake_repo) -> None:
    repo = CachedContentRepository(fake_repo, DictCache())
    await repo.get_by_slug(ContentKind.BLOG_POSTS, "tokyo-ramen-crawl")
    cached = await repo.get_by_slug(ContentKind.BLOG_POSTS, "tokyo-ramen-crawl")
    assert cached.author.display_name == "Maya Chen"
    assert len(fake_repo.calls_to("get_by_slug")) == 1


async def test_misses_are_not_cached(fake_repo) -> None:
    cache = DictCache()
    repo = CachedContentRepository(fake_repo, cache)
    assert await repo.get_by_slug(ContentKind.AUTHORS, "nobody") is None
    assert await repo.get_by_slug(ContentKind.AUTHORS, "nobody") is None
    assert len(fake_repo.calls_to("get_by_slug")) == 2
    assert cache.data == {}


async def test_uncacheable_slug_passes_through(fake_repo) -> None:
    cache = DictCache()
    repo = CachedContentRepository(fake_repo, cache)
    assert await repo.get_by_slug(ContentKind.AUTHORS, "a:b") is None
    assert cache.data == {}


async def test_relations_are_cached(fake_repo) -> None:
    repo = CachedContentRepository(fake_repo, DictCache())
    first = await repo.list_by_relation(ContentKind.AUTHORS, "a1")
    second = await repo.list_by_relation(ContentKind.AUTHORS, "a1")
    assert [p.id for p in second] == [p.id for p in first] == ["p1", "p3"]
    assert len(fake_repo.calls_to("list_by_relation")) == 1


async def test_search_is_never_cached(fake_repo) -> None:
    from wanderbites.application.dtos.search import SearchFilterSet

    cache = DictCache()
    repo = CachedContentRepository(fake_repo, cache)
    await repo.search(SearchFilterSet(text="ramen"))
    await repo.search(SearchFilterSet(text="ramen"))
    assert len(fake_repo.calls_to("search")) == 2
    assert cache.data == {}
