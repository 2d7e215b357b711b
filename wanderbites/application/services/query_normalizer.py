"""Query normalizer: raw user input to a canonical SearchFilterSet.

Pure and total. Anything that is blank after trimming, or cannot be
interpreted (unknown region, rating outside 1-5), is dropped rather than
sent to the store as an empty or impossible match.
"""

from __future__ import annotations

from wanderbites.application.dtos.search import SearchFilterSet
from wanderbites.shared.enums import Region

_REGIONS = frozenset(Region.values())


def _clean(raw: object) -> str | None:
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _region(raw: object) -> str | None:
    value = _clean(raw)
    if value is None:
        return None
    value = value.lower()
    return value if value in _REGIONS else None


def _rating(raw: object) -> int | None:
    value = _clean(raw)
    if value is None:
        return None
    try:
        rating = int(value)
    except ValueError:
        return None
    return rating if 1 <= rating <= 5 else None


def normalize(
    raw_text: object = None,
    raw_region: object = None,
    raw_rating: object = None,
    raw_tag: object = None,
    raw_category: object = None,
) -> SearchFilterSet:
    """Build a SearchFilterSet from raw form/query values.

    Example: normalize("ramen", "asia", "", "", "") gives
    SearchFilterSet(text="ramen", region="asia").
    """
    category = _clean(raw_category)
    return SearchFilterSet(
        text=_clean(raw_text),
        region=_region(raw_region),
        rating=_rating(raw_rating),
        tag=_clean(raw_tag),
        category=category.lower() if category else None,
    )
