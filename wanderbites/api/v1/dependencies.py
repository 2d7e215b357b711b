"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the content repository and the application
services. The Cosmic client (and optional cache) are created in the app
lifespan and read from app.state here; routes depend only on these
dependencies, never on infrastructure directly.

Dependencies take an HTTPConnection so they serve WebSocket routes too.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from starlette.requests import HTTPConnection

from wanderbites.application.interfaces.repositories import IContentRepository
from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.application.use_cases.search import SearchService
from wanderbites.core.config import get_settings
from wanderbites.infrastructure.cache.cached_content_repo import CachedContentRepository
from wanderbites.infrastructure.cosmic import CosmicContentRepository, CosmicRESTClient


def get_cosmic_client(conn: HTTPConnection) -> CosmicRESTClient:
    """Return the Cosmic client created in lifespan (503 if startup did not run)."""
    client = getattr(conn.app.state, "cosmic_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Content store is not configured")
    return client


def get_content_repo(
    conn: HTTPConnection,
    client: Annotated[CosmicRESTClient, Depends(get_cosmic_client)],
) -> IContentRepository:
    """Cosmic repository, behind the Redis read-through cache when one is connected."""
    repo: IContentRepository = CosmicContentRepository(client)
    cache = getattr(conn.app.state, "cache", None)
    if cache is not None and cache.is_available():
        repo = CachedContentRepository(repo, cache, ttl=get_settings().cache_ttl_content)
    return repo


def get_search_service(
    repo: Annotated[IContentRepository, Depends(get_content_repo)],
) -> SearchService:
    return SearchService(repo)


def get_content_service(
    repo: Annotated[IContentRepository, Depends(get_content_repo)],
) -> ContentQueryService:
    return ContentQueryService(repo)
