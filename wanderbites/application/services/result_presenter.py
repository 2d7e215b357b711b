"""Result presenter: SearchResultState -> display model.

Pure functions only. Loading, error, zero-result and idle states each get
their own copy; result cards carry title and excerpt split into segments
with every case-insensitive occurrence of the query marked.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from wanderbites.application.dtos.search import SearchResultState
from wanderbites.domain.entities.content import ContentRecord
from wanderbites.shared.enums import RATING_LABELS, SearchStatus

ViewKind = Literal["prompt", "loading", "error", "empty", "results"]

PROMPT_HEADLINE = "Discover your next food adventure"
PROMPT_MESSAGE = (
    "Search by dish, city, country, or keyword, or use the filters to browse "
    "by region, rating, and tags."
)
LOADING_HEADLINE = "Searching..."
ERROR_HEADLINE = "Something went wrong"
EMPTY_HEADLINE = "No stories found"
EMPTY_MESSAGE = "Try adjusting your search or filters."
MAX_CARD_TAGS = 2


@dataclass(frozen=True)
class TextSegment:
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class ResultCard:
    """One search hit ready for display."""

    id: str
    slug: str
    path: str
    title: list[TextSegment]
    excerpt: list[TextSegment]
    rating: int
    rating_label: str | None
    location: str
    tags: list[str]
    author_name: str | None
    category_names: list[str]
    publication_date: str | None


@dataclass(frozen=True)
class ResultView:
    """Everything a search surface shows for one state."""

    kind: ViewKind
    headline: str
    message: str | None = None
    total: int = 0
    cards: list[ResultCard] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def highlight(text: str, query: str | None) -> list[TextSegment]:
    """Split text into segments, marking each case-insensitive match of query.

    The query is matched literally. Empty text gives []; a blank query gives
    the whole text as one unmarked segment.
    """
    if not text:
        return []
    needle = (query or "").strip()
    if not needle:
        return [TextSegment(text)]
    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    segments: list[TextSegment] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            segments.append(TextSegment(text[pos : match.start()]))
        segments.append(TextSegment(match.group(0), highlighted=True))
        pos = match.end()
    if pos < len(text):
        segments.append(TextSegment(text[pos:]))
    return segments


def format_publication_date(record: ContentRecord) -> str | None:
    """e.g. "March 5, 2024"; None when the post has no valid date."""
    published = record.publication_date
    if published is None:
        return None
    return f"{published.strftime('%B')} {published.day}, {published.year}"


def _rating(record: ContentRecord) -> int:
    try:
        return int(record.rating_key or 0)
    except ValueError:
        return 0


def _location(record: ContentRecord) -> str:
    return ", ".join(part for part in (record.city, record.country) if part)


def present_card(record: ContentRecord, query: str | None) -> ResultCard:
    rating = _rating(record)
    author = record.author
    return ResultCard(
        id=record.id,
        slug=record.slug,
        path=f"/posts/{record.slug}",
        title=highlight(record.title, query),
        excerpt=highlight(record.excerpt, query),
        rating=rating,
        rating_label=RATING_LABELS.get(rating),
        location=_location(record),
        tags=record.tags[:MAX_CARD_TAGS],
        author_name=author.display_name if author else None,
        category_names=[c.display_name for c in record.categories],
        publication_date=format_publication_date(record),
    )


def present(state: SearchResultState, query: str | None = None) -> ResultView:
    """Build the display model for a state and the active query text."""
    if state.status == SearchStatus.LOADING:
        return ResultView(kind="loading", headline=LOADING_HEADLINE)
    if state.status == SearchStatus.ERROR:
        return ResultView(kind="error", headline=ERROR_HEADLINE, message=state.error)
    if state.status == SearchStatus.IDLE:
        return ResultView(kind="prompt", headline=PROMPT_HEADLINE, message=PROMPT_MESSAGE)
    if state.total_count == 0 or not state.records:
        return ResultView(kind="empty", headline=EMPTY_HEADLINE, message=EMPTY_MESSAGE)
    noun = "story" if state.total_count == 1 else "stories"
    return ResultView(
        kind="results",
        headline=f"{state.total_count} {noun} found",
        total=state.total_count,
        cards=[present_card(r, query) for r in state.records],
    )
