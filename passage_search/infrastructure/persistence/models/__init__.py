"""Persistence models: ORM entities."""

from passage_search.infrastructure.persistence.models.passage import Passage
from passage_search.infrastructure.persistence.models.section import Section

__all__ = [
    "Passage",
    "Section",
]
