"""Circuit breaker: fail fast after a high failure ratio in a rolling window.

One instance per resilience pipeline, shared by every request in the process.
State lives behind a threading.Lock (no awaits while held), so it is safe from
concurrent coroutines and threads alike. The clock is injectable for tests.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from passage_search.domain.enums import CircuitState
from passage_search.domain.exceptions import CircuitOpenException
from passage_search.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircuitBreakerSnapshot:
    """Point-in-time view of a breaker (readiness output, tests)."""

    name: str
    state: CircuitState
    sampled_calls: int
    failed_calls: int
    retry_after_seconds: float


class CircuitBreaker:
    """Closed -> Open -> HalfOpen -> Closed/Open state machine.

    Closed: calls pass; outcomes are sampled over sampling_duration seconds.
    When at least minimum_throughput calls were sampled and the failure ratio
    reaches failure_ratio, the circuit opens. Open: before_call() raises
    CircuitOpenException until break_duration elapses, then HalfOpen admits
    one probe; success closes the circuit, failure reopens it.

    Every state change starts a new generation. before_call() returns the
    generation a call was admitted under; outcomes reported with an older
    generation are ignored, so only the probe decides a HalfOpen circuit.
    """

    def __init__(
        self,
        name: str,
        *,
        failure_ratio: float = 0.5,
        sampling_duration: float = 10.0,
        minimum_throughput: int = 5,
        break_duration: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.failure_ratio = failure_ratio
        self.sampling_duration = sampling_duration
        self.minimum_throughput = minimum_throughput
        self.break_duration = break_duration
        self._clock = clock
        self._lock = Lock()
        self._state = CircuitState.CLOSED
        self._samples: deque[tuple[float, bool]] = deque()
        self._opened_at: float | None = None
        self._probe_in_flight = False
        self._generation = 0

    @property
    def state(self) -> CircuitState:
        """Current state (Open turns into HalfOpen once the break has elapsed)."""
        with self._lock:
            return self._current_state(self._clock())

    def snapshot(self) -> CircuitBreakerSnapshot:
        with self._lock:
            now = self._clock()
            state = self._current_state(now)
            self._prune(now)
            return CircuitBreakerSnapshot(
                name=self.name,
                state=state,
                sampled_calls=len(self._samples),
                failed_calls=sum(1 for _, failed in self._samples if failed),
                retry_after_seconds=self._retry_after(now),
            )

    def before_call(self) -> int:
        """Admit or reject a call; return the generation it was admitted under.

        Raises:
            CircuitOpenException: While Open, or while a HalfOpen probe is running.
        """
        with self._lock:
            now = self._clock()
            state = self._current_state(now)
            if state == CircuitState.CLOSED:
                return self._generation
            if state == CircuitState.HALF_OPEN and not self._probe_in_flight:
                self._probe_in_flight = True
                return self._generation
            raise CircuitOpenException(self.name, self._retry_after(now))

    def record_success(self, generation: int | None = None) -> None:
        with self._lock:
            if self._is_stale(generation):
                return
            now = self._clock()
            if self._state == CircuitState.HALF_OPEN:
                self._close()
                return
            if self._state == CircuitState.CLOSED:
                self._samples.append((now, False))
                self._prune(now)

    def record_failure(
        self, exc: BaseException | None = None, generation: int | None = None
    ) -> None:
        with self._lock:
            if self._is_stale(generation):
                return
            now = self._clock()
            if self._state == CircuitState.HALF_OPEN:
                self._open(now, exc)
                return
            if self._state != CircuitState.CLOSED:
                return
            self._samples.append((now, True))
            self._prune(now)
            total = len(self._samples)
            if total < self.minimum_throughput:
                return
            failures = sum(1 for _, failed in self._samples if failed)
            if failures / total >= self.failure_ratio:
                self._open(now, exc)

    def release_probe(self, generation: int | None = None) -> None:
        """Let another HalfOpen probe through when the admitted one was cancelled."""
        with self._lock:
            if self._is_stale(generation):
                return
            self._probe_in_flight = False

    def reset(self) -> None:
        """Force the breaker back to Closed with an empty window."""
        with self._lock:
            self._close()

    # Helpers below run with self._lock held.

    def _is_stale(self, generation: int | None) -> bool:
        return generation is not None and generation != self._generation

    def _current_state(self, now: float) -> CircuitState:
        if (
            self._state == CircuitState.OPEN
            and self._opened_at is not None
            and now - self._opened_at >= self.break_duration
        ):
            self._state = CircuitState.HALF_OPEN
            self._probe_in_flight = False
            self._generation += 1
            logger.info("Circuit breaker '%s' half-opened", self.name)
            add_span_event("circuit_breaker.half_opened", {"pipeline": self.name})
        return self._state

    def _retry_after(self, now: float) -> float:
        if self._state != CircuitState.OPEN or self._opened_at is None:
            return 0.0
        return max(0.0, self.break_duration - (now - self._opened_at))

    def _prune(self, now: float) -> None:
        cutoff = now - self.sampling_duration
        while self._samples and self._samples[0][0] <= cutoff:
            self._samples.popleft()

    def _open(self, now: float, exc: BaseException | None) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = now
        self._generation += 1
        self._probe_in_flight = False
        self._samples.clear()
        logger.error(
            "Circuit breaker '%s' opened for %.1fs due to %s",
            self.name,
            self.break_duration,
            repr(exc) if exc is not None else "failure threshold",
        )
        add_span_event(
            "circuit_breaker.opened",
            {"pipeline": self.name, "break_seconds": self.break_duration},
        )

    def _close(self) -> None:
        was = self._state
        self._state = CircuitState.CLOSED
        self._opened_at = None
        self._probe_in_flight = False
        self._samples.clear()
        if was != CircuitState.CLOSED:
            self._generation += 1
            logger.info("Circuit breaker '%s' closed", self.name)
            add_span_event("circuit_breaker.closed", {"pipeline": self.name})
