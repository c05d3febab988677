"""Application use cases: one entry point per workflow."""

from passage_search.application.use_cases.autocomplete import AutocompleteService
from passage_search.application.use_cases.search import SearchService

__all__ = [
    "AutocompleteService",
    "SearchService",
]
