"""Application DTOs: read-models and request objects shared by use cases and repositories."""

from passage_search.application.dtos.search import (
    AutocompleteRequest,
    PassageResult,
    SearchRequest,
    SearchResult,
    SectionResult,
    compute_total_pages,
)

__all__ = [
    "AutocompleteRequest",
    "PassageResult",
    "SearchRequest",
    "SearchResult",
    "SectionResult",
    "compute_total_pages",
]
