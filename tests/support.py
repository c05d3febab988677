"""Shared test helpers: fast resilience policies that never sleep."""

from passage_search.infrastructure.resilience import (
    ResiliencePipeline,
    ResiliencePolicy,
    ResilienceService,
    is_transient_database_error,
    is_transient_http_error,
)


async def no_sleep(_: float) -> None:
    """Retry sleep replacement: tests never wait for backoff."""


def fast_policy(name: str = "database", **overrides) -> ResiliencePolicy:
    """Database-like policy with short timeouts for tests."""
    params = {
        "name": name,
        "is_transient": (
            is_transient_http_error if name == "outbound-http" else is_transient_database_error
        ),
        "max_retry_attempts": 3,
        "base_delay": 0.01,
        "max_delay": 0.05,
        "jitter": 0.0,
        "timeout": 2.0,
        "failure_ratio": 0.5,
        "sampling_duration": 10.0,
        "minimum_throughput": 5,
        "break_duration": 30.0,
    }
    params.update(overrides)
    return ResiliencePolicy(**params)


def make_resilience(**overrides) -> ResilienceService:
    """Isolated ResilienceService (own breakers) that never sleeps between retries."""
    return ResilienceService(
        database=ResiliencePipeline(fast_policy("database", **overrides), sleep=no_sleep),
        http=ResiliencePipeline(fast_policy("outbound-http", **overrides), sleep=no_sleep),
    )
