"""WebSocket search endpoint: /ws/search.

Each connection gets its own SearchSession (and so its own orchestrator);
the session is registered with the ConnectionManager on app.state.ws_manager
(set in lifespan) and torn down when the client disconnects.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket

from wanderbites.api.v1.dependencies import get_search_service
from wanderbites.api.websocket import SearchSession
from wanderbites.application.use_cases.search import SearchService
from wanderbites.core.config import get_settings

router = APIRouter()


@router.websocket("/search")
async def search_socket(
    websocket: WebSocket,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> None:
    """Incremental search: send filter frames, receive a result view per state change."""
    manager = websocket.app.state.ws_manager
    await websocket.accept()
    session = SearchSession(
        websocket,
        search_svc.search,
        debounce_seconds=get_settings().search_debounce_seconds,
    )
    await manager.connect(session)
    try:
        await session.run()
    finally:
        await manager.disconnect(session)
