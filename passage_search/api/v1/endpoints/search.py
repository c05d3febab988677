"""Search API: paged passage search, match counts, and filter options."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from passage_search.api.v1.dependencies import get_search_service
from passage_search.application.dtos.search import SearchRequest
from passage_search.application.use_cases.search import SearchService
from passage_search.core.limiter import limit_search
from passage_search.domain.enums import FilterField
from passage_search.domain.exceptions import ValidationException
from passage_search.domain.value_objects import SearchFilters
from passage_search.schemas.search import (
    PassageResponse,
    SearchRequestBody,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_term(search_term: str) -> None:
    if not search_term or not search_term.strip():
        raise ValidationException("Search term is required", field="search_term")


@router.post("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    body: SearchRequestBody,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> SearchResponse:
    """Substring search over passage content with optional filters, one page at a time."""
    _require_term(body.search_term)
    logger.info(
        "Executing search: term=%r page=%d page_size=%d",
        body.search_term,
        body.page,
        body.page_size,
    )
    result = await search_svc.execute_search(
        SearchRequest(
            search_term=body.search_term,
            filters=body.filters.to_filters(),
            page=body.page,
            page_size=body.page_size,
        )
    )
    return SearchResponse(
        results=[PassageResponse.model_validate(r) for r in result.results],
        total_count=result.total_count,
        current_page=result.current_page,
        total_pages=result.total_pages,
        has_next_page=result.has_next_page,
        has_previous_page=result.has_previous_page,
    )


@router.get("/count", response_model=int)
@limit_search
async def search_count(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    search_term: str = Query(..., max_length=500),
    types: Annotated[list[str] | None, Query()] = None,
    authors: Annotated[list[str] | None, Query()] = None,
    section_ids: Annotated[list[int] | None, Query()] = None,
) -> int:
    """Total number of passages matching term and filters."""
    _require_term(search_term)
    return await search_svc.get_search_count(
        SearchRequest(
            search_term=search_term,
            filters=SearchFilters.of(types=types, authors=authors, section_ids=section_ids),
        )
    )


@router.get("/filters/types", response_model=list[str])
async def filter_types(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> list[str]:
    """Distinct non-empty passage types, sorted."""
    return await search_svc.get_distinct_values(FilterField.TYPE)


@router.get("/filters/authors", response_model=list[str])
async def filter_authors(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> list[str]:
    """Distinct non-empty passage authors, sorted."""
    return await search_svc.get_distinct_values(FilterField.AUTHOR)
