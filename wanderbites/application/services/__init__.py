"""Application services: query normalization, search orchestration, presentation."""

from wanderbites.application.services.query_normalizer import normalize
from wanderbites.application.services.result_presenter import (
    ResultCard,
    ResultView,
    TextSegment,
    highlight,
    present,
)
from wanderbites.application.services.search_filters import (
    matches_filters,
    matches_text,
)
from wanderbites.application.services.search_orchestrator import SearchOrchestrator

__all__ = [
    "ResultCard",
    "ResultView",
    "SearchOrchestrator",
    "TextSegment",
    "highlight",
    "matches_filters",
    "matches_text",
    "normalize",
    "present",
]
