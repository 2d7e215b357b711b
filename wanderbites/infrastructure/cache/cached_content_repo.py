"""Read-through cache in front of any IContentRepository.

Caches list_all, get_by_slug and list_by_relation as JSON (ContentRecord
dicts) with a TTL. Search is always passed through so results reflect the
store. Misses (None) are not cached.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wanderbites.application.dtos.search import SearchFilterSet, SearchPage
from wanderbites.domain.entities.content import ContentRecord
from wanderbites.infrastructure.cache.keys import (
    content_list_key,
    content_relation_key,
    content_slug_key,
)
from wanderbites.shared.enums import ContentKind

if TYPE_CHECKING:
    from wanderbites.application.interfaces.repositories import IContentRepository
    from wanderbites.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)


def _records(raw: list[dict]) -> list[ContentRecord]:
    return [ContentRecord.from_cosmic(r) for r in raw]


class CachedContentRepository:
    """IContentRepository decorator backed by a CacheProtocol."""

    def __init__(
        self,
        inner: "IContentRepository",
        cache: "CacheProtocol",
        ttl: int = 60,
    ) -> None:
        self.inner = inner
        self.cache = cache
        self.ttl = ttl

    async def list_all(self, kind: ContentKind) -> list[ContentRecord]:
        key = content_list_key(ContentKind(kind).value)
        cached = await self.cache.get(key)
        if cached is not None:
            return _records(cached)
        records = await self.inner.list_all(kind)
        await self.cache.set(key, [r.to_dict() for r in records], ttl=self.ttl)
        return records

    async def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        try:
            key = content_slug_key(ContentKind(kind).value, slug)
        except ValueError:
            logger.debug("Slug %r is not cacheable", slug)
            return await self.inner.get_by_slug(kind, slug)
        cached = await self.cache.get(key)
        if cached is not None:
            return ContentRecord.from_cosmic(cached)
        record = await self.inner.get_by_slug(kind, slug)
        if record is not None:
            await self.cache.set(key, record.to_dict(), ttl=self.ttl)
        return record

    async def list_by_relation(
        self, kind: ContentKind, related_id: str
    ) -> list[ContentRecord]:
        try:
            key = content_relation_key(str(getattr(kind, "value", kind)), related_id)
        except ValueError:
            return await self.inner.list_by_relation(kind, related_id)
        cached = await self.cache.get(key)
        if cached is not None:
            return _records(cached)
        records = await self.inner.list_by_relation(kind, related_id)
        await self.cache.set(key, [r.to_dict() for r in records], ttl=self.ttl)
        return records

    async def search(self, filters: SearchFilterSet) -> SearchPage:
        return await self.inner.search(filters)
