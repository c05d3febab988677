"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from passage_search.infrastructure or passage_search.api.
"""

from passage_search.application.interfaces.repositories import (
    IPassageRepository,
    ISectionRepository,
)
from passage_search.application.interfaces.services import ISearchMetrics

__all__ = [
    "IPassageRepository",
    "ISearchMetrics",
    "ISectionRepository",
]
