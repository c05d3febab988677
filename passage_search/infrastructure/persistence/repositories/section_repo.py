"""Section repository. Returns application DTOs; every query is resilient."""

from __future__ import annotations

from sqlalchemy import select, text

from passage_search.application.dtos.search import SectionResult
from passage_search.infrastructure.persistence.models.section import Section
from passage_search.infrastructure.persistence.repositories.base import (
    ResilientRepository,
)


def _to_result(s: Section) -> SectionResult:
    """Map ORM Section to SectionResult."""
    return SectionResult(id=s.id, name=s.name, description=s.description)


class SectionRepository(ResilientRepository):
    """Read access to sections."""

    async def get_all(self) -> list[SectionResult]:
        async def query() -> list[SectionResult]:
            result = await self.db.execute(
                select(Section).order_by(Section.name.asc(), Section.id.asc())
            )
            return [_to_result(s) for s in result.scalars().all()]

        return await self._run(query, "get_all_sections")

    async def get_by_id(self, section_id: int) -> SectionResult | None:
        async def query() -> SectionResult | None:
            row = await self.db.get(Section, section_id)
            return _to_result(row) if row else None

        return await self._run(query, f"get_section_by_id(id={section_id})")

    async def ping(self) -> bool:
        """Round-trip a trivial query (readiness probe)."""

        async def query() -> bool:
            await self.db.execute(text("SELECT 1"))
            return True

        return await self._run(query, "ping")
