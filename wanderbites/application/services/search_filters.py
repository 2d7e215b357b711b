"""Record-level matching for a SearchFilterSet.

Used as the client-side post-filter by content repositories for the fields
the store cannot query directly (region, rating, tag), and to re-check the
text match independently of the store's regex dialect.
"""

from wanderbites.application.dtos.search import SearchFilterSet
from wanderbites.domain.entities.content import ContentRecord

TEXT_SEARCH_FIELDS = ("title", "excerpt", "city", "country")


def matches_text(record: ContentRecord, text: str) -> bool:
    """Case-insensitive substring match over title, excerpt, city, country."""
    needle = text.casefold()
    return any(
        needle in str(getattr(record, name) or "").casefold()
        for name in TEXT_SEARCH_FIELDS
    )


def matches_filters(record: ContentRecord, filters: SearchFilterSet) -> bool:
    """True when the record satisfies every set field except category.

    Category is resolved to an id and queried in the store; embedded
    category summaries are checked too when present.
    """
    if filters.text is not None and not matches_text(record, filters.text):
        return False
    if filters.region is not None and record.region_key != filters.region:
        return False
    if filters.rating is not None and record.rating_key != str(filters.rating):
        return False
    if filters.tag is not None and filters.tag not in record.tags:
        return False
    if filters.category is not None:
        embedded = record.categories
        if embedded and filters.category not in {c.slug for c in embedded}:
            return False
    return True
