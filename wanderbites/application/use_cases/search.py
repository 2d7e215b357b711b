"""Post search use case. Delegates to IContentRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wanderbites.application.dtos.search import SearchFilterSet, SearchPage

if TYPE_CHECKING:
    from wanderbites.application.interfaces.repositories import IContentRepository

logger = logging.getLogger(__name__)


class SearchService:
    """Search blog posts by text and filters. Shared by HTTP and WebSocket surfaces."""

    def __init__(self, content_repo: "IContentRepository") -> None:
        self.content_repo = content_repo

    async def search(self, filters: SearchFilterSet) -> SearchPage:
        """Run the search; an empty filter set returns an empty page without querying."""
        if filters.is_empty():
            logger.debug("Empty filter set; skipping content store query")
            return SearchPage()
        return await self.content_repo.search(filters)
