"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no
infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from passage_search.application.dtos.search import PassageResult, SectionResult
    from passage_search.domain.enums import FilterField
    from passage_search.domain.value_objects import SearchFilters


# Passage store (query executor) interface
class IPassageRepository(Protocol):
    """Protocol for the passage store (DIP). Every call runs under the database resilience pipeline."""

    async def search(
        self, term: str, filters: SearchFilters, page: int, page_size: int
    ) -> list[PassageResult]:
        """Return one page of passages whose content contains term, ordered by id ascending. Blank term matches all."""

    async def count(self, term: str, filters: SearchFilters) -> int:
        """Return the number of passages matching term and filters (no paging)."""

    async def distinct_values(self, field: FilterField) -> list[str]:
        """Return sorted, de-duplicated, non-empty values of a categorical field."""

    async def autocomplete_suggestions(
        self, term: str, filters: SearchFilters, max_results: int
    ) -> list[str]:
        """Return distinct matching content values in first-match order, at most max_results. Empty for terms shorter than 2."""


# Section repository interface
class ISectionRepository(Protocol):
    """Protocol for section lookups (DIP)."""

    async def get_all(self) -> list[SectionResult]:
        """Return all sections ordered by name."""

    async def get_by_id(self, section_id: int) -> SectionResult | None:
        """Return section by id, or None."""
