"""Search routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from tenantkit.core.search.service import SearchService
from tenantkit.core.search.types import SearchRequest, SearchResponse
from tenantkit.entrypoints.api.deps import get_search_service
from tenantkit.entrypoints.api.middleware.jwt_auth import CurrentCaller
from tenantkit.entrypoints.api.responses import ApiResponse, ok

router = APIRouter(prefix="/search", tags=["search"])

SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]


@router.post("", response_model=ApiResponse[SearchResponse])
async def search(
    request: Request,
    body: SearchRequest,
    service: SearchServiceDep,
) -> ApiResponse[SearchResponse]:
    """Run a search with optional facet filters. No authentication required."""
    return ok(request, await service.search(body))


@router.get("", response_model=ApiResponse[SearchResponse])
async def quick_search(
    request: Request,
    caller: CurrentCaller,
    service: SearchServiceDep,
    q: Annotated[str, Query(min_length=1, max_length=500)],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 10,
    category: Annotated[str | None, Query()] = None,
    type: Annotated[str | None, Query()] = None,
) -> ApiResponse[SearchResponse]:
    """Run a search from query string parameters."""
    body = SearchRequest(
        search_query=q,
        page_number=page,
        page_size=page_size,
        category=category,
        type=type,
    )
    return ok(request, await service.search(body))
