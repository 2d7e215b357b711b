"""Shared enumerations for the Wanderbites application.

Values mirror the keys of the Cosmic content model (object types and
select-dropdown keys), so they can be compared with store data directly.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ContentKind(_ValuesMixin, str, Enum):
    """Cosmic object type of a content record."""

    BLOG_POSTS = "blog-posts"
    AUTHORS = "authors"
    CATEGORIES = "categories"


class Region(_ValuesMixin, str, Enum):
    """Region select-dropdown keys on blog posts."""

    ASIA = "asia"
    EUROPE = "europe"
    NORTH_AMERICA = "north-america"
    SOUTH_AMERICA = "south-america"
    AFRICA = "africa"
    MIDDLE_EAST = "middle-east"
    OCEANIA = "oceania"


class PostStatus(_ValuesMixin, str, Enum):
    """Post status select-dropdown keys."""

    DRAFT = "draft"
    PUBLISHED = "published"
    FEATURED = "featured"


class SearchStatus(_ValuesMixin, str, Enum):
    """Lifecycle status of a search surface's result state."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


# Rating select-dropdown keys ("1".."5") map to these labels.
RATING_LABELS: dict[int, str] = {
    5: "Must Visit",
    4: "Great",
    3: "Good",
    2: "Fair",
    1: "Skip It",
}
