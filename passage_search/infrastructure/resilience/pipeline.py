"""Resilience pipeline: retry (tenacity) around a circuit breaker around a per-attempt timeout."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from passage_search.infrastructure.resilience.circuit_breaker import CircuitBreaker
from passage_search.infrastructure.resilience.policies import ResiliencePolicy
from passage_search.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResiliencePipeline:
    """Execute async operations under one ResiliencePolicy.

    Order (outer to inner): retry -> circuit breaker -> timeout. Every attempt
    passes through the breaker, so retries are sampled too. Transient failures
    are retried with exponential backoff and jitter; anything else, including
    CircuitOpenException, propagates at once. The last exception is re-raised
    unchanged.
    """

    def __init__(
        self,
        policy: ResiliencePolicy,
        *,
        breaker: CircuitBreaker | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.policy = policy
        self.breaker = breaker or CircuitBreaker(
            policy.name,
            failure_ratio=policy.failure_ratio,
            sampling_duration=policy.sampling_duration,
            minimum_throughput=policy.minimum_throughput,
            break_duration=policy.break_duration,
            clock=clock,
        )
        self._sleep = sleep

    @property
    def name(self) -> str:
        return self.policy.name

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str = "operation",
    ) -> T:
        """Run operation (a zero-arg coroutine factory, called once per attempt)."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.policy.max_retry_attempts + 1),
            wait=wait_exponential(
                multiplier=self.policy.base_delay, max=self.policy.max_delay
            )
            + wait_random(0, self.policy.jitter),
            retry=retry_if_exception(self.policy.is_transient),
            before_sleep=lambda state: self._log_retry(state, operation_name),
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(self._attempt, operation)

    async def _attempt(self, operation: Callable[[], Awaitable[T]]) -> T:
        generation = self.breaker.before_call()
        try:
            result = await asyncio.wait_for(operation(), timeout=self.policy.timeout)
        except Exception as exc:
            if self.policy.is_transient(exc):
                self.breaker.record_failure(exc, generation)
            else:
                self.breaker.record_success(generation)
            raise
        except BaseException:
            self.breaker.release_probe(generation)
            raise
        self.breaker.record_success(generation)
        return result

    def _log_retry(self, retry_state: RetryCallState, operation_name: str) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "%s operation %s retry %d after %.0fms. Exception: %r",
            self.policy.name,
            operation_name,
            retry_state.attempt_number,
            delay * 1000,
            exc,
        )
        add_span_event(
            "resilience.retry",
            {
                "pipeline": self.policy.name,
                "attempt": retry_state.attempt_number,
                "delay_ms": round(delay * 1000, 1),
            },
        )
