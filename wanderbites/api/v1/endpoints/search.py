"""Search API: one-shot post search by text, region, rating, tag and category."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from wanderbites.api.v1.dependencies import get_search_service
from wanderbites.application.services.query_normalizer import normalize
from wanderbites.application.use_cases.search import SearchService
from wanderbites.core.limiter import limit_search
from wanderbites.schemas.content import to_response_list
from wanderbites.schemas.search import SearchErrorResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=SearchResponse,
    responses={500: {"description": "Search failed", "model": SearchErrorResponse}},
)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = Query(None, max_length=500, description="Free text"),
    region: str | None = Query(None, description="Region key, e.g. asia"),
    rating: str | None = Query(None, description="Exact rating 1-5"),
    tag: str | None = Query(None, max_length=100),
    category: str | None = Query(None, description="Category slug"),
):
    """Search posts. Blank or unknown values are ignored; no filters gives no results."""
    filters = normalize(q, region, rating, tag, category)
    try:
        page = await search_svc.search(filters)
    except Exception:
        logger.exception("Search failed for filters %s", filters.to_dict())
        return JSONResponse(status_code=500, content=SearchErrorResponse().model_dump())
    return SearchResponse(
        posts=to_response_list(page.records),
        total=page.total_count,
        filters=filters.to_dict(),
    )
