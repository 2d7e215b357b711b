"""Domain entities.

Pure domain models; no HTTP or persistence concerns.
"""

from wanderbites.domain.entities.content import ContentRecord

__all__ = ["ContentRecord"]
