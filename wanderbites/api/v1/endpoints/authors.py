"""Author API."""

from typing import Annotated

from fastapi import APIRouter, Depends

from wanderbites.api.v1.dependencies import get_content_service
from wanderbites.application.use_cases.content import ContentQueryService
from wanderbites.schemas.content import (
    AuthorDetailResponse,
    ContentRecordResponse,
    to_response_list,
)

router = APIRouter()


@router.get("", response_model=list[ContentRecordResponse])
async def list_authors(
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    return to_response_list(await content_svc.list_authors())


@router.get("/{slug}", response_model=AuthorDetailResponse)
async def get_author(
    slug: str,
    content_svc: Annotated[ContentQueryService, Depends(get_content_service)],
):
    """Author by slug with their posts; 404 when the slug is unknown."""
    return AuthorDetailResponse.from_page(await content_svc.get_author(slug))
