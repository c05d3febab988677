"""Passage search use case. Delegates to IPassageRepository and records timing metrics."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from passage_search.application.dtos.search import (
    SearchRequest,
    SearchResult,
    compute_total_pages,
)
from passage_search.domain.enums import FilterField
from passage_search.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from passage_search.application.interfaces.repositories import IPassageRepository
    from passage_search.application.interfaces.services import ISearchMetrics


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class SearchService:
    """Paged passage search with filter options.

    Failures from the repository (including a rejected call from an open
    circuit or an exhausted retry budget) propagate unchanged; the service
    only records a failed-attempt metric on the way out.
    """

    def __init__(
        self,
        passage_repo: "IPassageRepository",
        metrics: "ISearchMetrics",
    ) -> None:
        self.passage_repo = passage_repo
        self.metrics = metrics

    @traced("search.execute")
    async def execute_search(self, request: SearchRequest) -> SearchResult:
        """Run the page query and the count query, then assemble a SearchResult."""
        started = time.perf_counter()
        context = self._metric_context(request)
        try:
            results = await self.passage_repo.search(
                request.search_term,
                request.filters,
                request.page,
                request.page_size,
            )
            total_count = await self.passage_repo.count(
                request.search_term, request.filters
            )
        except Exception:
            self.metrics.record_search_metric(
                request.search_term, 0, _elapsed_ms(started), context
            )
            raise

        search_result = SearchResult(
            results=list(results),
            total_count=total_count,
            current_page=request.page,
            total_pages=compute_total_pages(total_count, request.page_size),
        )
        add_span_attributes(
            total_count=total_count,
            page=request.page,
            page_size=request.page_size,
        )
        self.metrics.record_search_metric(
            request.search_term, total_count, _elapsed_ms(started), context
        )
        return search_result

    async def get_search_count(self, request: SearchRequest) -> int:
        """Return the total number of matches (no paging, no metrics)."""
        return await self.passage_repo.count(request.search_term, request.filters)

    async def get_distinct_values(self, field: FilterField) -> list[str]:
        """Return sorted filter options for a categorical field (type or author)."""
        return await self.passage_repo.distinct_values(field)

    @staticmethod
    def _metric_context(request: SearchRequest) -> dict[str, Any]:
        return {
            "page": request.page,
            "page_size": request.page_size,
            "filter_count": request.filters.count,
        }
