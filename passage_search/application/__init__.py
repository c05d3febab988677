"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, metrics sink).
"""

from passage_search.application.interfaces import (
    IPassageRepository,
    ISearchMetrics,
    ISectionRepository,
)
from passage_search.application.use_cases import AutocompleteService, SearchService

__all__ = [
    "AutocompleteService",
    "IPassageRepository",
    "ISearchMetrics",
    "ISectionRepository",
    "SearchService",
]
