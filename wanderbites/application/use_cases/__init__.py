"""Application use cases: one entry point per workflow."""

from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.application.use_cases.search import SearchService

__all__ = ["ContentQueryService", "SearchService"]
