"""Persistence repositories. Re-exports for dependency injection."""

from passage_search.infrastructure.persistence.repositories.passage_repo import (
    PassageRepository,
)
from passage_search.infrastructure.persistence.repositories.section_repo import (
    SectionRepository,
)

__all__ = [
    "PassageRepository",
    "SectionRepository",
]
