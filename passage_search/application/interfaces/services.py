"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


# Metrics sink interface
class ISearchMetrics(Protocol):
    """Protocol for recording search/autocomplete timings. Fire-and-forget: must never raise."""

    def record_search_metric(
        self,
        term: str,
        result_count: int,
        elapsed_ms: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record one search execution (result_count 0 for a failed attempt)."""

    def record_autocomplete_metric(
        self,
        term: str,
        suggestion_count: int,
        elapsed_ms: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record one autocomplete execution (suggestion_count 0 for a failed attempt)."""
