"""Autocomplete API: content suggestions for a partially typed term."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from passage_search.api.v1.dependencies import get_autocomplete_service
from passage_search.application.dtos.search import AutocompleteRequest
from passage_search.application.use_cases.autocomplete import AutocompleteService
from passage_search.core.constants import (
    MAX_AUTOCOMPLETE_REQUEST_RESULTS,
    MAX_AUTOCOMPLETE_RESULTS,
    MIN_AUTOCOMPLETE_TERM_LENGTH,
)
from passage_search.core.limiter import limit_autocomplete
from passage_search.domain.exceptions import ValidationException
from passage_search.domain.value_objects import SearchFilters

router = APIRouter()


@router.get("/suggestions", response_model=list[str])
@limit_autocomplete
async def suggestions(
    request: Request,
    autocomplete_svc: Annotated[AutocompleteService, Depends(get_autocomplete_service)],
    search_term: str = Query(..., max_length=500),
    types: Annotated[list[str] | None, Query()] = None,
    authors: Annotated[list[str] | None, Query()] = None,
    section_ids: Annotated[list[int] | None, Query()] = None,
    max_results: int = Query(
        MAX_AUTOCOMPLETE_RESULTS, ge=1, le=MAX_AUTOCOMPLETE_REQUEST_RESULTS
    ),
) -> list[str]:
    """Up to 10 distinct passage contents containing search_term (first match first)."""
    if not search_term.strip():
        raise ValidationException("Search term is required", field="search_term")
    if len(search_term) < MIN_AUTOCOMPLETE_TERM_LENGTH:
        raise ValidationException(
            f"Search term must be at least {MIN_AUTOCOMPLETE_TERM_LENGTH} characters long",
            field="search_term",
        )
    return await autocomplete_svc.get_suggestions(
        AutocompleteRequest(
            search_term=search_term,
            filters=SearchFilters.of(types=types, authors=authors, section_ids=section_ids),
            max_results=max_results,
        )
    )
