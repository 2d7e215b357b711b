"""Application ports (protocols implemented by infrastructure)."""

from wanderbites.application.interfaces.repositories import IContentRepository

__all__ = ["IContentRepository"]
