"""Home page API: featured post, recent posts, categories and authors."""

from typing import Annotated

from fastapi import APIRouter, Depends

from wanderbites.api.v1.dependencies import get_content_service
from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.schemas.content import HomeResponse

router = APIRouter()


@router.get("", response_model=HomeResponse)
async def get_home(
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    """Landing page content in one call (four store queries run concurrently)."""
    page = await content_svc.get_home()
    return HomeResponse.from_page(page)
