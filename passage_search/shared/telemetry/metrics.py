"""Performance metrics for search and autocomplete.

PerformanceLogger is the metrics sink used by the search use cases. Every
measurement goes to the log and to OpenTelemetry instruments (no-op when no
meter provider is configured). Recording never raises into the caller.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from opentelemetry import metrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Operations slower than this (ms) are logged at WARNING.
DEFAULT_SLOW_OPERATION_MS = 200
# log_performance: at or above this (ms) an operation is logged at WARNING.
VERY_SLOW_OPERATION_MS = 1000


class PerformanceLogger:
    """Logs timings and records them on OpenTelemetry histograms/counters."""

    def __init__(
        self,
        slow_operation_ms: float = DEFAULT_SLOW_OPERATION_MS,
        meter: metrics.Meter | None = None,
    ) -> None:
        self.slow_operation_ms = slow_operation_ms
        meter = meter or metrics.get_meter(__name__)
        self._search_duration = meter.create_histogram(
            "passage_search.search.duration",
            unit="ms",
            description="Search execution time",
        )
        self._search_results = meter.create_histogram(
            "passage_search.search.results",
            description="Total matches per search",
        )
        self._autocomplete_duration = meter.create_histogram(
            "passage_search.autocomplete.duration",
            unit="ms",
            description="Autocomplete execution time",
        )
        self._slow_operations = meter.create_counter(
            "passage_search.slow_operations",
            description="Searches and autocompletes slower than the warning threshold",
        )

    def record_search_metric(
        self,
        term: str,
        result_count: int,
        elapsed_ms: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        try:
            self._record(
                "search",
                term,
                result_count,
                elapsed_ms,
                context,
                self._search_duration,
            )
            self._search_results.record(result_count)
        except Exception:
            logger.debug("Failed to record search metric", exc_info=True)

    def record_autocomplete_metric(
        self,
        term: str,
        suggestion_count: int,
        elapsed_ms: float,
        context: dict[str, Any] | None = None,
    ) -> None:
        try:
            self._record(
                "autocomplete",
                term,
                suggestion_count,
                elapsed_ms,
                context,
                self._autocomplete_duration,
            )
        except Exception:
            logger.debug("Failed to record autocomplete metric", exc_info=True)

    async def log_performance(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str,
        context: dict[str, Any] | None = None,
    ) -> T:
        """Await operation and log its duration; failures are logged and re-raised."""
        started = time.perf_counter()
        try:
            result = await operation()
        except Exception as e:
            logger.error(
                "Operation %s failed after %.1fms (%s: %s). Context: %s",
                operation_name,
                (time.perf_counter() - started) * 1000,
                type(e).__name__,
                e,
                context or {},
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms >= VERY_SLOW_OPERATION_MS:
            level = logging.WARNING
        elif elapsed_ms > self.slow_operation_ms:
            level = logging.INFO
        else:
            level = logging.DEBUG
        logger.log(
            level,
            "Operation %s completed in %.1fms. Context: %s",
            operation_name,
            elapsed_ms,
            context or {},
        )
        return result

    def _record(
        self,
        kind: str,
        term: str,
        count: int,
        elapsed_ms: float,
        context: dict[str, Any] | None,
        histogram: metrics.Histogram,
    ) -> None:
        histogram.record(elapsed_ms, attributes={"outcome": "hit" if count else "empty"})
        slow = elapsed_ms > self.slow_operation_ms
        if slow:
            self._slow_operations.add(1, attributes={"operation": kind})
            logger.warning(
                "Slow %s: %.1fms for term %r with %d results (threshold %sms). Context: %s",
                kind,
                elapsed_ms,
                term,
                count,
                self.slow_operation_ms,
                context or {},
            )
        else:
            logger.info(
                "%s completed: %.1fms for term %r with %d results. Context: %s",
                kind.capitalize(),
                elapsed_ms,
                term,
                count,
                context or {},
            )
