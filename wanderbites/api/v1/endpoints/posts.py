"""Blog post API: list and detail with related posts."""

from typing import Annotated

from fastapi import APIRouter, Depends

from wanderbites.api.v1.dependencies import get_content_service
from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.schemas.content import (
    ContentRecordResponse,
    PostDetailResponse,
    to_response_list,
)

router = APIRouter()


@router.get("", response_model=list[ContentRecordResponse])
async def list_posts(
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    """All posts, newest publication date first."""
    return to_response_list(await content_svc.list_posts())


@router.get("/{slug}", response_model=PostDetailResponse)
async def get_post(
    slug: str,
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    """Post by slug plus up to two other posts; 404 when the slug is unknown."""
    page = await content_svc.get_post(slug)
    return PostDetailResponse.from_page(page)
