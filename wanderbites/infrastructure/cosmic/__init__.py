"""Cosmic headless CMS integration (REST client and content repository)."""

from wanderbites.infrastructure.cosmic._rest_client import CosmicRESTClient
from wanderbites.infrastructure.cosmic.repositories import CosmicContentRepository

__all__ = ["CosmicContentRepository", "CosmicRESTClient"]
