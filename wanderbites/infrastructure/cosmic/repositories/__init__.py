"""Cosmic-backed repositories."""

from wanderbites.infrastructure.cosmic.repositories.content_repo_cosmic import (
    CosmicContentRepository,
    sort_newest_first,
)

__all__ = ["CosmicContentRepository", "sort_newest_first"]
