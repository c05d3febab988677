"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories and use cases.
Routes depend only on these dependencies, not on infrastructure directly.
Tests override get_db / get_resilience_service / get_performance_logger via
app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from passage_search.application.use_cases import AutocompleteService, SearchService
from passage_search.core.config import get_settings
from passage_search.infrastructure.persistence.database import get_db
from passage_search.infrastructure.persistence.repositories import (
    PassageRepository,
    SectionRepository,
)
from passage_search.infrastructure.resilience import (
    ResilienceService,
    get_resilience_service,
)
from passage_search.shared.telemetry.metrics import PerformanceLogger


@lru_cache
def get_performance_logger() -> PerformanceLogger:
    """Process-wide metrics sink (instruments are created once)."""
    return PerformanceLogger(slow_operation_ms=get_settings().slow_operation_warning_ms)


async def get_passage_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
    resilience: Annotated[ResilienceService, Depends(get_resilience_service)],
) -> PassageRepository:
    """Passage repository (read-only, resilient)."""
    return PassageRepository(db, resilience)


async def get_section_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
    resilience: Annotated[ResilienceService, Depends(get_resilience_service)],
) -> SectionRepository:
    """Section repository (read-only, resilient)."""
    return SectionRepository(db, resilience)


async def get_search_service(
    passage_repo: Annotated[PassageRepository, Depends(get_passage_repo)],
    metrics: Annotated[PerformanceLogger, Depends(get_performance_logger)],
) -> SearchService:
    """Paged passage search use case."""
    return SearchService(passage_repo, metrics)


async def get_autocomplete_service(
    passage_repo: Annotated[PassageRepository, Depends(get_passage_repo)],
    metrics: Annotated[PerformanceLogger, Depends(get_performance_logger)],
) -> AutocompleteService:
    """Autocomplete use case."""
    return AutocompleteService(passage_repo, metrics)
