"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from passage_search.domain.enums import CircuitState, FilterField
from passage_search.domain.exceptions import (
    CircuitOpenException,
    PassageSearchException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    ValidationException,
)
from passage_search.domain.value_objects import (
    SearchFilters,
    build_filter_predicate,
)

__all__ = [
    # Enums
    "CircuitState",
    "FilterField",
    # Exceptions
    "CircuitOpenException",
    "PassageSearchException",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "ValidationException",
    # Value objects
    "SearchFilters",
    "build_filter_predicate",
]
