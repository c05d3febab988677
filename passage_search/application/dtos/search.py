"""DTOs for passage search and autocomplete (no dependency on ORM)."""

import math
from dataclasses import dataclass, field

from passage_search.core.constants import DEFAULT_PAGE_SIZE, MAX_AUTOCOMPLETE_RESULTS
from passage_search.domain.value_objects import SearchFilters


@dataclass(frozen=True)
class SectionResult:
    """Section read-model."""

    id: int
    name: str
    description: str | None


@dataclass(frozen=True)
class PassageResult:
    """Passage read-model. section_name is resolved from the owning Section."""

    id: int
    content: str
    section_id: int
    section_name: str
    from_ref: str | None
    to_ref: str | None
    type: str | None
    author: str | None


@dataclass(frozen=True)
class SearchRequest:
    """Search input (validated at the HTTP boundary: page >= 1, page_size 1..100)."""

    search_term: str
    filters: SearchFilters = field(default_factory=SearchFilters)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class AutocompleteRequest:
    """Autocomplete input; max_results is clamped by the service."""

    search_term: str
    filters: SearchFilters = field(default_factory=SearchFilters)
    max_results: int = MAX_AUTOCOMPLETE_RESULTS


def compute_total_pages(total_count: int, page_size: int) -> int:
    """Return ceil(total_count / page_size); 0 when there is nothing to page."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


@dataclass(frozen=True)
class SearchResult:
    """One page of passages plus paging metadata."""

    results: list[PassageResult]
    total_count: int
    current_page: int
    total_pages: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1
