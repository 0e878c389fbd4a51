"""Circuit breaker pattern: CLOSED, OPEN. Failure threshold, timed re-close, persisted state. Metrics tracking."""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from secure_inquiry.scalability.circuit_state_store import (
    CircuitBreakerState,
    CircuitState,
    CircuitStateStore,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircuitBreakerResult(Generic[T]):
    """Outcome of execute(): CLOSED with the operation result, or OPEN with the fallback."""

    status: CircuitState
    result: T


class CircuitBreaker:
    """
    Circuit breaker: after failure_threshold consecutive failures, open for cooldown_seconds,
    then close again on a background timer (no trial call). While open, calls resolve to the
    fallback without touching the dependency.

    State is loaded from the store on first use and persisted after every mutation. Reads and
    writes are serialized by one asyncio.Lock; the lock is not held while the operation runs.
    Store failures never fail a call: unreadable state falls back to {0, CLOSED}, unwritable
    state keeps the in-memory value, and persistence_degraded reports the condition.
    """

    def __init__(
        self,
        state_store: CircuitStateStore,
        failure_threshold: int = 3,
        cooldown_seconds: float = 10.0,
        call_timeout_seconds: Optional[float] = None,
        name: str = "default",
        metrics_callback: Any = None,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        self._store = state_store
        self._threshold = failure_threshold
        self._cooldown = cooldown_seconds
        self._call_timeout = call_timeout_seconds
        self._name = name
        self._metrics = metrics_callback
        self._state: Optional[CircuitBreakerState] = None
        self._cooldown_task: Optional[asyncio.Task[None]] = None
        self._persistence_degraded = False
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> CircuitState:
        return self.snapshot().status

    @property
    def failure_count(self) -> int:
        return self.snapshot().failure_count

    @property
    def persistence_degraded(self) -> bool:
        return self._persistence_degraded

    @property
    def cooldown_seconds(self) -> float:
        return self._cooldown

    @property
    def cooldown_pending(self) -> bool:
        return self._cooldown_task is not None and not self._cooldown_task.done()

    def snapshot(self) -> CircuitBreakerState:
        """Current in-memory state; {0, CLOSED} before first use."""
        return self._state or CircuitBreakerState()

    def _increment(self, metric: str) -> None:
        if self._metrics and hasattr(self._metrics, "increment"):
            self._metrics.increment(metric, 1, category=self._name)

    def _publish_state_gauge(self) -> None:
        if self._metrics and hasattr(self._metrics, "set_gauge"):
            is_open = 1.0 if self.snapshot().status is CircuitState.OPEN else 0.0
            self._metrics.set_gauge("circuit_breaker_open", is_open, category=self._name)

    async def _ensure_loaded(self) -> CircuitBreakerState:
        """Load persisted state once. Caller holds the lock."""
        if self._state is not None:
            return self._state
        try:
            loaded = await self._store.load()
        except Exception as e:
            self._persistence_degraded = True
            self._increment("circuit_breaker_persistence_degraded")
            logger.warning(
                "circuit_state_load_failed",
                extra={"breaker": self._name, "error": str(e)},
            )
            loaded = None
        self._state = loaded or CircuitBreakerState()
        if self._state.status is CircuitState.OPEN:
            # Restarted while open: the previous timer died with the old process.
            self._arm_cooldown()
        self._publish_state_gauge()
        return self._state

    async def _transition(self, new_state: CircuitBreakerState) -> None:
        """Replace in-memory state and persist it. Caller holds the lock."""
        self._state = new_state
        self._publish_state_gauge()
        try:
            await self._store.save(new_state)
        except Exception as e:
            self._persistence_degraded = True
            self._increment("circuit_breaker_persistence_degraded")
            logger.error(
                "circuit_state_persist_failed",
                extra={"breaker": self._name, "error": str(e), **new_state.to_dict()},
            )
            return
        self._persistence_degraded = False

    def _arm_cooldown(self) -> None:
        """Schedule the OPEN -> CLOSED transition unless one is already pending."""
        if self.cooldown_pending:
            return
        self._cooldown_task = asyncio.get_running_loop().create_task(
            self._close_after_cooldown(), name=f"circuit-breaker-cooldown:{self._name}"
        )

    def _cancel_cooldown(self) -> None:
        if self.cooldown_pending:
            assert self._cooldown_task is not None
            self._cooldown_task.cancel()
        self._cooldown_task = None

    async def _close_after_cooldown(self) -> None:
        await asyncio.sleep(self._cooldown)
        async with self._lock:
            if self._state is not None and self._state.status is CircuitState.OPEN:
                await self._transition(CircuitBreakerState())
                logger.info("circuit_reset_after_cooldown", extra={"breaker": self._name})

    async def _record_success(self) -> None:
        await self._ensure_loaded()
        was_open = self.snapshot().status is CircuitState.OPEN
        await self._transition(CircuitBreakerState())
        if was_open:
            self._cancel_cooldown()
        self._increment("circuit_breaker_success")

    async def _record_failure(self) -> None:
        current = await self._ensure_loaded()
        failures = current.failure_count + 1
        self._increment("circuit_breaker_failure")
        if failures >= self._threshold:
            await self._transition(CircuitBreakerState(failures, CircuitState.OPEN))
            self._arm_cooldown()
            if current.status is CircuitState.CLOSED:
                logger.warning(
                    "circuit_opened",
                    extra={
                        "breaker": self._name,
                        "failure_count": failures,
                        "cooldown_seconds": self._cooldown,
                    },
                )
        else:
            await self._transition(CircuitBreakerState(failures, current.status))
            logger.info(
                "circuit_failure_recorded",
                extra={"breaker": self._name, "failure_count": failures},
            )

    async def load(self) -> CircuitBreakerState:
        """Load persisted state on first use (re-arming the cool-down if it was OPEN) and return it."""
        async with self._lock:
            return await self._ensure_loaded()

    async def execute(
        self,
        operation: Callable[..., Awaitable[T]],
        fallback_value: T,
        *args: Any,
        **kwargs: Any,
    ) -> CircuitBreakerResult[T]:
        """
        Run operation(*args, **kwargs) through the circuit.
        OPEN: return (OPEN, fallback_value) without calling operation.
        CLOSED: return (CLOSED, result) on success; on failure (including timeout) record it and re-raise.
        """
        async with self._lock:
            current = await self._ensure_loaded()
            if current.status is CircuitState.OPEN:
                self._increment("circuit_breaker_short_circuit")
                logger.info("circuit_open_fallback", extra={"breaker": self._name})
                return CircuitBreakerResult(CircuitState.OPEN, fallback_value)
        try:
            if self._call_timeout is not None:
                result = await asyncio.wait_for(operation(*args, **kwargs), self._call_timeout)
            else:
                result = await operation(*args, **kwargs)
        except Exception:
            async with self._lock:
                await self._record_failure()
            raise
        async with self._lock:
            await self._record_success()
        return CircuitBreakerResult(CircuitState.CLOSED, result)

    async def reset(self) -> None:
        """Force {0, CLOSED} and drop any pending cool-down (operator action)."""
        async with self._lock:
            await self._transition(CircuitBreakerState())
            self._cancel_cooldown()
        logger.info("circuit_reset_manually", extra={"breaker": self._name})

    async def aclose(self) -> None:
        """Cancel the pending cool-down timer, if any. State stays as persisted."""
        task = self._cooldown_task
        self._cooldown_task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
