"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wanderbites.application.dtos.search import SearchFilterSet, SearchPage
    from wanderbites.domain.entities.content import ContentRecord
    from wanderbites.shared.enums import ContentKind


class IContentRepository(Protocol):
    """Protocol for the content store (posts, authors, categories).

    Not-found is never an error at this boundary: single-record lookups
    return None and list lookups return []. Every other failure raises
    TransportFailure. Lists are newest first when records carry a
    publication date; otherwise store order is preserved.
    """

    async def list_all(self, kind: ContentKind) -> list[ContentRecord]:
        """Return every record of the given kind."""

    async def get_by_slug(self, kind: ContentKind, slug: str) -> ContentRecord | None:
        """Return the record with this slug, or None."""

    async def list_by_relation(
        self, kind: ContentKind, related_id: str
    ) -> list[ContentRecord]:
        """Return posts that reference the record related_id of the given kind."""

    async def search(self, filters: SearchFilterSet) -> SearchPage:
        """Return posts matching every constraint in filters."""
