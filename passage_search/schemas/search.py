"""Passage search API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from passage_search.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from passage_search.domain.value_objects import SearchFilters


class SearchFiltersRequest(BaseModel):
    """Optional filter lists; an empty list places no constraint on that field."""

    types: list[str] = Field(default_factory=list)
    authors: list[str] = Field(default_factory=list)
    section_ids: list[int] = Field(default_factory=list)

    def to_filters(self) -> SearchFilters:
        return SearchFilters.of(
            types=self.types, authors=self.authors, section_ids=self.section_ids
        )


class SearchRequestBody(BaseModel):
    """Request body for POST /search."""

    search_term: str = Field(..., max_length=500)
    filters: SearchFiltersRequest = Field(default_factory=SearchFiltersRequest)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class PassageResponse(BaseModel):
    """One passage hit."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    section_id: int
    section_name: str
    from_ref: str | None
    to_ref: str | None
    type: str | None
    author: str | None


class SearchResponse(BaseModel):
    """One page of results plus paging metadata."""

    model_config = ConfigDict(from_attributes=True)

    results: list[PassageResponse]
    total_count: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
