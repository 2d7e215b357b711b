"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from wanderbites.domain.entities import ContentRecord
from wanderbites.domain.exceptions import (
    ContentNotFoundException,
    TransportFailure,
    ValidationException,
    WanderbitesException,
)

__all__ = [
    "ContentNotFoundException",
    "ContentRecord",
    "TransportFailure",
    "ValidationException",
    "WanderbitesException",
]
