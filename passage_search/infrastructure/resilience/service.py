"""ResilienceService: the database and outbound-HTTP pipelines behind one entry point.

A single instance per process (get_resilience_service) so breaker state is
aggregated across all requests. Tests build isolated instances directly.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import TypeVar

from passage_search.core.config import get_settings
from passage_search.infrastructure.resilience.circuit_breaker import (
    CircuitBreakerSnapshot,
)
from passage_search.infrastructure.resilience.pipeline import ResiliencePipeline
from passage_search.infrastructure.resilience.policies import (
    database_policy,
    http_policy,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResilienceService:
    """Run data-access and outbound calls under their pipelines; never swallows errors."""

    def __init__(
        self, database: ResiliencePipeline, http: ResiliencePipeline
    ) -> None:
        self.database = database
        self.http = http

    async def execute_database_operation(
        self, operation: Callable[[], Awaitable[T]], operation_name: str
    ) -> T:
        """Execute a database call with retry, circuit breaker and timeout."""
        return await self._execute(self.database, operation, operation_name)

    async def execute_http_operation(
        self, operation: Callable[[], Awaitable[T]], operation_name: str
    ) -> T:
        """Execute an outbound HTTP call with retry, circuit breaker and timeout."""
        return await self._execute(self.http, operation, operation_name)

    def snapshots(self) -> list[CircuitBreakerSnapshot]:
        return [self.database.breaker.snapshot(), self.http.breaker.snapshot()]

    @staticmethod
    async def _execute(
        pipeline: ResiliencePipeline,
        operation: Callable[[], Awaitable[T]],
        operation_name: str,
    ) -> T:
        started = time.perf_counter()
        logger.debug("Executing %s operation: %s", pipeline.name, operation_name)
        try:
            result = await pipeline.execute(operation, operation_name)
        except Exception:
            logger.exception(
                "%s operation %s failed after %.0fms",
                pipeline.name,
                operation_name,
                (time.perf_counter() - started) * 1000,
            )
            raise
        logger.debug(
            "%s operation %s completed successfully in %.0fms",
            pipeline.name,
            operation_name,
            (time.perf_counter() - started) * 1000,
        )
        return result


@lru_cache
def get_resilience_service() -> ResilienceService:
    """Return the process-wide ResilienceService built from settings.

    Call get_resilience_service.cache_clear() after changing settings in tests.
    """
    settings = get_settings()
    return ResilienceService(
        database=ResiliencePipeline(database_policy(settings)),
        http=ResiliencePipeline(http_policy(settings)),
    )
