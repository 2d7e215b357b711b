"""Category API."""

from typing import Annotated

from fastapi import APIRouter, Depends

from wanderbites.api.v1.dependencies import get_content_service
from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.schemas.content import (
    CategoryDetailResponse,
    ContentRecordResponse,
    to_response_list,
)

router = APIRouter()


@router.get("", response_model=list[ContentRecordResponse])
async def list_categories(
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    return to_response_list(await content_svc.list_categories())


@router.get("/{slug}", response_model=CategoryDetailResponse)
async def get_category(
    slug: str,
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    """Category by slug with the posts filed under it."""
    return CategoryDetailResponse.from_page(await content_svc.get_category(slug))
