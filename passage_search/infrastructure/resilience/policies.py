"""Resilience policies: tuning and transient-failure classification per pipeline.

Two pipelines exist: "database" (every passage/section query) and
"outbound-http" (external HTTP calls). Values come from Settings.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import httpx
from sqlalchemy import exc as sa_exc

from passage_search.core.config import Settings
from passage_search.core.constants import DATABASE_PIPELINE, HTTP_PIPELINE


def is_transient_database_error(exc: BaseException) -> bool:
    """Return True for storage timeouts/unavailability worth retrying.

    Malformed queries, constraint violations and domain errors are not
    transient and propagate immediately.
    """
    if isinstance(exc, TimeoutError):
        return True
    if isinstance(
        exc,
        (sa_exc.OperationalError, sa_exc.TimeoutError, sa_exc.DisconnectionError),
    ):
        return True
    if isinstance(exc, sa_exc.DBAPIError) and exc.connection_invalidated:
        return True
    return False


def is_transient_http_error(exc: BaseException) -> bool:
    """Return True for transport-level HTTP failures and timeouts."""
    return isinstance(exc, (httpx.TransportError, TimeoutError))


@dataclass(frozen=True)
class ResiliencePolicy:
    """Retry + circuit breaker + timeout tuning for one pipeline.

    max_retry_attempts counts retries after the initial attempt, so an
    always-failing transient call runs max_retry_attempts + 1 times.
    """

    name: str
    is_transient: Callable[[BaseException], bool]
    max_retry_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter: float = 1.0
    timeout: float = 30.0
    failure_ratio: float = 0.5
    sampling_duration: float = 10.0
    minimum_throughput: int = 5
    break_duration: float = 30.0


def database_policy(settings: Settings) -> ResiliencePolicy:
    """Policy for database calls (3 retries from 1s, 30s timeout, 30s break)."""
    return ResiliencePolicy(
        name=DATABASE_PIPELINE,
        is_transient=is_transient_database_error,
        max_retry_attempts=settings.db_retry_max_attempts,
        base_delay=settings.db_retry_base_delay_seconds,
        max_delay=settings.db_retry_max_delay_seconds,
        jitter=settings.db_retry_base_delay_seconds,
        timeout=settings.db_timeout_seconds,
        failure_ratio=settings.db_breaker_failure_ratio,
        sampling_duration=settings.db_breaker_sampling_seconds,
        minimum_throughput=settings.db_breaker_minimum_throughput,
        break_duration=settings.db_breaker_break_seconds,
    )


def http_policy(settings: Settings) -> ResiliencePolicy:
    """Policy for outbound HTTP calls (2 retries from 0.5s, 10s timeout, 15s break)."""
    return ResiliencePolicy(
        name=HTTP_PIPELINE,
        is_transient=is_transient_http_error,
        max_retry_attempts=settings.http_retry_max_attempts,
        base_delay=settings.http_retry_base_delay_seconds,
        max_delay=settings.http_retry_max_delay_seconds,
        jitter=settings.http_retry_base_delay_seconds,
        timeout=settings.http_timeout_seconds,
        failure_ratio=settings.http_breaker_failure_ratio,
        sampling_duration=settings.http_breaker_sampling_seconds,
        minimum_throughput=settings.http_breaker_minimum_throughput,
        break_duration=settings.http_breaker_break_seconds,
    )
