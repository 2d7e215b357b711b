"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from wanderbites.api.v1.dependencies (no manual
repo/service construction).
"""

from fastapi import APIRouter

from wanderbites.api.v1.endpoints import (
    authors,
    categories,
    health,
    home,
    posts,
    search,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(home.router, prefix="/home", tags=["home"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(authors.router, prefix="/authors", tags=["authors"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(ws_endpoint.router, prefix="/ws", tags=["websocket"])
