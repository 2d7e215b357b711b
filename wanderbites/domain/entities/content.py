"""Content record entity.

A ContentRecord is a denormalized object from the content store: a post,
author, or category. Posts embed author and category summaries one level
deep; those summaries are ContentRecords themselves, with no further
expansion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from wanderbites.shared.enums import ContentKind


def _parse_date(raw: Any) -> date | None:
    """Parse an ISO date or datetime string; None when missing or malformed."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return None


def _dropdown_key(value: Any) -> str | None:
    """Return the key of a select-dropdown metafield ({"key", "value"} or plain str)."""
    if isinstance(value, dict):
        key = value.get("key")
        return str(key) if key not in (None, "") else None
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class ContentRecord:
    """Content record as returned by the store (read-model, never mutated).

    id and slug are assigned by the content store. metadata shape varies
    by kind; the properties below read the blog-post fields defensively.
    """

    id: str
    slug: str
    title: str
    kind: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None
    modified_at: str | None = None

    @classmethod
    def from_cosmic(cls, obj: dict[str, Any], kind: str | None = None) -> ContentRecord:
        """Build from a Cosmic object dict (props id,title,slug,metadata,type,...)."""
        return cls(
            id=str(obj.get("id", "")),
            slug=str(obj.get("slug", "")),
            title=str(obj.get("title", "")),
            kind=str(obj.get("type") or kind or ""),
            metadata=dict(obj.get("metadata") or {}),
            created_at=obj.get("created_at"),
            modified_at=obj.get("modified_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict (inverse of from_cosmic)."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "type": self.kind,
            "metadata": self.metadata,
            "created_at": self.created_at,
            "modified_at": self.modified_at,
        }

    @property
    def display_name(self) -> str:
        """metadata.name for authors/categories, falling back to the title."""
        name = self.metadata.get("name")
        return str(name) if name else self.title

    @property
    def publication_date(self) -> date | None:
        return _parse_date(self.metadata.get("publication_date"))

    @property
    def excerpt(self) -> str:
        return str(self.metadata.get("excerpt") or "")

    @property
    def city(self) -> str:
        return str(self.metadata.get("city") or "")

    @property
    def country(self) -> str:
        return str(self.metadata.get("country") or "")

    @property
    def region_key(self) -> str | None:
        return _dropdown_key(self.metadata.get("region"))

    @property
    def rating_key(self) -> str | None:
        return _dropdown_key(self.metadata.get("rating"))

    @property
    def post_status_key(self) -> str | None:
        return _dropdown_key(self.metadata.get("post_status"))

    @property
    def tags(self) -> list[str]:
        raw = self.metadata.get("tags") or []
        if isinstance(raw, str):
            return [raw]
        return [str(t) for t in raw]

    @property
    def author(self) -> ContentRecord | None:
        """Embedded author summary; None when absent or not expanded (bare id)."""
        raw = self.metadata.get("author")
        if isinstance(raw, dict):
            return ContentRecord.from_cosmic(raw, ContentKind.AUTHORS.value)
        return None

    @property
    def categories(self) -> list[ContentRecord]:
        """Embedded category summaries (ids that were not expanded are skipped)."""
        raw = self.metadata.get("categories") or []
        return [
            ContentRecord.from_cosmic(c, ContentKind.CATEGORIES.value)
            for c in raw
            if isinstance(c, dict)
        ]
