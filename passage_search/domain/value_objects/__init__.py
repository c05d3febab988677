"""Domain value objects and shared value types."""

from passage_search.domain.value_objects.core import (
    FilterablePassage,
    SearchFilters,
    build_filter_predicate,
)

__all__ = [
    "FilterablePassage",
    "SearchFilters",
    "build_filter_predicate",
]
