"""Shared telemetry: logging setup, OpenTelemetry config, tracing helpers, and metrics."""

from passage_search.shared.telemetry.logging import (
    CorrelationIdFilter,
    get_logger,
    setup_logging,
)
from passage_search.shared.telemetry.metrics import PerformanceLogger
from passage_search.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from passage_search.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "CorrelationIdFilter",
    "PerformanceLogger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
    "set_span_error",
]
