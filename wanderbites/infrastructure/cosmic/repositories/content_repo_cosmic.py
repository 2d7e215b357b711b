"""Cosmic-backed content repository (implements IContentRepository).

Every query requests one level of relationship expansion (depth=1), so
posts carry author and category summaries. Text and category constraints
are pushed to Cosmic; region, rating and tag are exact-match post-filters
applied here, and the text match is re-checked locally.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from wanderbites.application.dtos.search import SearchFilterSet, SearchPage
from wanderbites.application.services.search_filters import matches_filters
from wanderbites.domain.entities.content import ContentRecord
from wanderbites.domain.exceptions import ValidationException
from wanderbites.infrastructure.cosmic._rest_client import CosmicRESTClient
from wanderbites.shared.enums import ContentKind
from wanderbites.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

# Store-side field paths searched by free text.
TEXT_QUERY_FIELDS = ("title", "metadata.excerpt", "metadata.city", "metadata.country")

# Kind of the related record -> post metafield that references it.
_RELATION_FIELDS: dict[ContentKind, str] = {
    ContentKind.AUTHORS: "metadata.author",
    ContentKind.CATEGORIES: "metadata.categories",
}


def sort_newest_first(records: list[ContentRecord]) -> list[ContentRecord]:
    """Sort by descending publication date; undated records follow in store order."""
    dated = [r for r in records if r.publication_date is not None]
    undated = [r for r in records if r.publication_date is None]
    dated.sort(key=lambda r: r.publication_date, reverse=True)
    return dated + undated


def build_text_clause(text: str) -> list[dict[str, Any]]:
    """Case-insensitive literal substring match over the text search fields."""
    pattern = re.escape(text)
    return [{field: {"$regex": pattern, "$options": "i"}} for field in TEXT_QUERY_FIELDS]


class CosmicContentRepository:
    """Content store adapter over CosmicRESTClient."""

    def __init__(self, client: CosmicRESTClient) -> None:
        self.client = client

    async def _find(self, query: dict[str, Any], kind: ContentKind) -> list[ContentRecord]:
        objects = await self.client.find(query).depth(1).all()
        records = [ContentRecord.from_cosmic(obj, kind.value) for obj in objects]
        return sort_newest_first(records)

    @traced("content.list_all")
    async def list_all(self, kind: ContentKind) -> list[ContentRecord]:
        kind = ContentKind(kind)
        return await self._find({"type": kind.value}, kind)

    @traced("content.get_by_slug")
    async def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        kind = ContentKind(kind)
        obj = await self.client.find_one({"type": kind.value, "slug": slug})
        if obj is None:
            logger.debug("No %s with slug %r", kind.value, slug)
            return None
        return ContentRecord.from_cosmic(obj, kind.value)

    @traced("content.list_by_relation")
    async def list_by_relation(
        self, kind: ContentKind, related_id: str
    ) -> list[ContentRecord]:
        field = _RELATION_FIELDS.get(kind)
        if field is None:
            raise ValidationException(
                f"Posts cannot be listed by relation to {getattr(kind, 'value', kind)}",
                field="kind",
            )
        return await self._find(
            {"type": ContentKind.BLOG_POSTS.value, field: related_id},
            ContentKind.BLOG_POSTS,
        )

    @traced("content.search")
    async def search(self, filters: SearchFilterSet) -> SearchPage:
        query: dict[str, Any] = {"type": ContentKind.BLOG_POSTS.value}
        if filters.category is not None:
            category = await self.get_by_slug(ContentKind.CATEGORIES, filters.category)
            if category is None:
                return SearchPage()
            query["metadata.categories"] = category.id
        if filters.text is not None:
            query["$or"] = build_text_clause(filters.text)
        candidates = await self._find(query, ContentKind.BLOG_POSTS)
        records = [r for r in candidates if matches_filters(r, filters)]
        add_span_attributes(
            **{"search.candidates": len(candidates), "search.matches": len(records)}
        )
        return SearchPage(records=records, total_count=len(records))
