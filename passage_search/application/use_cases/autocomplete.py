"""Autocomplete use case: fast-reject short terms, clamp result count, delegate to the passage store."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from passage_search.application.dtos.search import AutocompleteRequest
from passage_search.core.constants import (
    MAX_AUTOCOMPLETE_RESULTS,
    MIN_AUTOCOMPLETE_TERM_LENGTH,
)
from passage_search.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from passage_search.application.interfaces.repositories import IPassageRepository
    from passage_search.application.interfaces.services import ISearchMetrics


def clamp_max_results(requested: int) -> int:
    """Clamp a requested suggestion count to [1, MAX_AUTOCOMPLETE_RESULTS]."""
    return max(1, min(requested, MAX_AUTOCOMPLETE_RESULTS))


class AutocompleteService:
    """Content suggestions for a partially typed search term."""

    def __init__(
        self,
        passage_repo: "IPassageRepository",
        metrics: "ISearchMetrics",
    ) -> None:
        self.passage_repo = passage_repo
        self.metrics = metrics

    @traced("autocomplete.suggestions")
    async def get_suggestions(self, request: AutocompleteRequest) -> list[str]:
        """Return up to clamp(max_results) suggestions.

        Blank, whitespace-only, or too-short terms return [] immediately:
        no store call and no metric.
        """
        term = request.search_term
        if not term or not term.strip() or len(term) < MIN_AUTOCOMPLETE_TERM_LENGTH:
            return []

        max_results = clamp_max_results(request.max_results)
        context = {"max_results": max_results, "filter_count": request.filters.count}
        started = time.perf_counter()
        try:
            suggestions = await self.passage_repo.autocomplete_suggestions(
                term, request.filters, max_results
            )
        except Exception:
            self.metrics.record_autocomplete_metric(
                term, 0, (time.perf_counter() - started) * 1000, context
            )
            raise

        suggestions = list(suggestions)[:max_results]
        add_span_attributes(suggestion_count=len(suggestions))
        self.metrics.record_autocomplete_metric(
            term, len(suggestions), (time.perf_counter() - started) * 1000, context
        )
        return suggestions
