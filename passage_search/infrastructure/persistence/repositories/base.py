"""Base repository: runs session queries under the database resilience pipeline."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from passage_search.infrastructure.resilience import ResilienceService

T = TypeVar("T")


class ResilientRepository:
    """Shared session and resilience wiring for read repositories."""

    def __init__(self, db: AsyncSession, resilience: ResilienceService) -> None:
        self.db = db
        self.resilience = resilience

    async def _run(self, query: Callable[[], Awaitable[T]], operation_name: str) -> T:
        """Run query under the database pipeline.

        Every retry starts with a rollback: a failed attempt, or one cancelled
        by the per-attempt timeout, leaves the session's transaction unusable.
        """
        attempts = 0

        async def attempt() -> T:
            nonlocal attempts
            attempts += 1
            if attempts > 1:
                await self.db.rollback()
            return await query()

        return await self.resilience.execute_database_operation(attempt, operation_name)
