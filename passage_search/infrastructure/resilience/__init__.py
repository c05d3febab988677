"""Resilience: retry, circuit breaker and timeout around data-access and outbound calls."""

from passage_search.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerSnapshot,
)
from passage_search.infrastructure.resilience.pipeline import ResiliencePipeline
from passage_search.infrastructure.resilience.policies import (
    ResiliencePolicy,
    database_policy,
    http_policy,
    is_transient_database_error,
    is_transient_http_error,
)
from passage_search.infrastructure.resilience.service import (
    ResilienceService,
    get_resilience_service,
)

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerSnapshot",
    "ResiliencePipeline",
    "ResiliencePolicy",
    "ResilienceService",
    "database_policy",
    "get_resilience_service",
    "http_policy",
    "is_transient_database_error",
    "is_transient_http_error",
]
