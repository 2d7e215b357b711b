"""WebSocket search sessions and their connection manager."""

from wanderbites.api.websocket.manager import ConnectionManager
from wanderbites.api.websocket.session import SearchSession, state_frame

__all__ = ["ConnectionManager", "SearchSession", "state_frame"]
