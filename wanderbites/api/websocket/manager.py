"""WebSocket search session manager.

Tracks active SearchSessions so shutdown can abort their pending searches.
Use via app.state.ws_manager (set in lifespan).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wanderbites.api.websocket.session import SearchSession

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Registry of live search sessions (one per WebSocket connection)."""

    def __init__(self) -> None:
        self._sessions: set[SearchSession] = set()
        self._lock = asyncio.Lock()

    async def connect(self, session: SearchSession) -> None:
        async with self._lock:
            self._sessions.add(session)
        logger.debug("Search session opened (%s active)", len(self._sessions))

    async def disconnect(self, session: SearchSession) -> None:
        async with self._lock:
            self._sessions.discard(session)
        logger.debug("Search session closed (%s active)", len(self._sessions))

    async def connection_count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def close_all(self) -> None:
        """Close every session's orchestrator (used at shutdown)."""
        async with self._lock:
            sessions = list(self._sessions)
            self._sessions.clear()
        for session in sessions:
            await session.close()
        if sessions:
            logger.info("Closed %s search sessions", len(sessions))
