"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter, Request

from wanderbites.core.config import get_settings
from wanderbites.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return ok status for liveness, with the number of open search sockets."""
    manager = getattr(request.app.state, "ws_manager", None)
    sessions = await manager.connection_count() if manager is not None else 0
    return HealthResponse(version=get_settings().app_version, search_sessions=sessions)
