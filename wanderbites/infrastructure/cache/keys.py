"""Cache key builders. Single place for key format.

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from wanderbites.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_CONTENT,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator."""
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def _content_key(op: str, kind: str, arg: str | None = None) -> str:
    _validate_key_component(kind, "kind")
    parts = [CACHE_PREFIX_CONTENT, op, kind]
    if arg is not None:
        _validate_key_component(arg, op)
        parts.append(arg)
    return CACHE_KEY_SEP.join(parts)


def content_list_key(kind: str) -> str:
    """Cache key for all records of a kind."""
    return _content_key("all", kind)


def content_slug_key(kind: str, slug: str) -> str:
    """Cache key for one record by kind and slug."""
    return _content_key("slug", kind, slug)


def content_relation_key(kind: str, related_id: str) -> str:
    """Cache key for posts related to a record (author or category id)."""
    return _content_key("related", kind, related_id)
