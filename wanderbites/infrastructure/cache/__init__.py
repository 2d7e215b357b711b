"""Cache: Redis service, key builders, and the caching content repository."""

from wanderbites.infrastructure.cache.cache_protocol import CacheProtocol
from wanderbites.infrastructure.cache.cached_content_repo import CachedContentRepository
from wanderbites.infrastructure.cache.keys import (
    content_list_key,
    content_relation_key,
    content_slug_key,
)
from wanderbites.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "CachedContentRepository",
    "content_list_key",
    "content_relation_key",
    "content_slug_key",
]
