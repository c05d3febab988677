"""Passage repository: substring search, counts, filter options and autocomplete.

Every query runs under the database resilience pipeline. Returns application
DTOs (no ORM objects leak out).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from passage_search.application.dtos.search import PassageResult
from passage_search.core.constants import MIN_AUTOCOMPLETE_TERM_LENGTH
from passage_search.domain.enums import FilterField
from passage_search.domain.exceptions import ValidationException
from passage_search.domain.value_objects import SearchFilters
from passage_search.infrastructure.persistence.expressions import contains_text
from passage_search.infrastructure.persistence.models.passage import Passage
from passage_search.infrastructure.persistence.repositories.base import (
    ResilientRepository,
)

_FILTER_COLUMNS = {
    FilterField.TYPE: Passage.type,
    FilterField.AUTHOR: Passage.author,
}


def _to_result(p: Passage) -> PassageResult:
    """Map ORM Passage (with section loaded) to PassageResult."""
    return PassageResult(
        id=p.id,
        content=p.content,
        section_id=p.section_id,
        section_name=p.section.name if p.section is not None else "",
        from_ref=p.from_ref,
        to_ref=p.to_ref,
        type=p.type,
        author=p.author,
    )


def filter_conditions(filters: SearchFilters) -> list[Any]:
    """SQL form of the filter predicate: IN per non-empty dimension, ANDed."""
    conditions: list[Any] = []
    if filters.types:
        conditions.append(Passage.type.in_(filters.types))
    if filters.authors:
        conditions.append(Passage.author.in_(filters.authors))
    if filters.section_ids:
        conditions.append(Passage.section_id.in_(filters.section_ids))
    return conditions


def search_conditions(term: str, filters: SearchFilters) -> list[Any]:
    """Content match plus filters. A blank term places no constraint on content."""
    conditions: list[Any] = []
    if term and term.strip():
        conditions.append(contains_text(Passage.content, term))
    conditions.extend(filter_conditions(filters))
    return conditions


class PassageRepository(ResilientRepository):
    """Query executor over the passage table."""

    async def search(
        self, term: str, filters: SearchFilters, page: int, page_size: int
    ) -> list[PassageResult]:
        """Return one page ordered by id ascending; past the last page returns []."""

        async def query() -> list[PassageResult]:
            stmt = (
                select(Passage)
                .options(joinedload(Passage.section))
                .where(*search_conditions(term, filters))
                .order_by(Passage.id.asc())
                .offset(max(page - 1, 0) * page_size)
                .limit(page_size)
            )
            result = await self.db.execute(stmt)
            return [_to_result(p) for p in result.scalars().all()]

        return await self._run(
            query, f"search(term={term!r}, page={page}, page_size={page_size})"
        )

    async def count(self, term: str, filters: SearchFilters) -> int:
        async def query() -> int:
            stmt = (
                select(func.count())
                .select_from(Passage)
                .where(*search_conditions(term, filters))
            )
            result = await self.db.execute(stmt)
            return int(result.scalar_one())

        return await self._run(query, f"count(term={term!r})")

    async def distinct_values(self, field: FilterField | str) -> list[str]:
        """Sorted (code point order), de-duplicated, non-empty values of type or author."""
        try:
            column = _FILTER_COLUMNS[FilterField(field)]
        except ValueError:
            raise ValidationException(
                f"Unknown filter field {field!r}; expected one of {FilterField.values()}",
                field="field",
            ) from None

        async def query() -> list[str]:
            stmt = (
                select(column)
                .where(column.is_not(None), column != "")
                .distinct()
            )
            result = await self.db.execute(stmt)
            return sorted(set(result.scalars().all()))

        return await self._run(query, f"distinct_values(field={FilterField(field).value})")

    async def autocomplete_suggestions(
        self, term: str, filters: SearchFilters, max_results: int
    ) -> list[str]:
        """Distinct contents containing term, in first-match (lowest id) order."""
        if (
            not term
            or not term.strip()
            or len(term) < MIN_AUTOCOMPLETE_TERM_LENGTH
            or max_results < 1
        ):
            return []

        async def query() -> list[str]:
            stmt = (
                select(Passage.content)
                .where(
                    contains_text(Passage.content, term),
                    *filter_conditions(filters),
                )
                .group_by(Passage.content)
                .order_by(func.min(Passage.id).asc())
                .limit(max_results)
            )
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

        return await self._run(
            query,
            f"autocomplete_suggestions(term={term!r}, max_results={max_results})",
        )

