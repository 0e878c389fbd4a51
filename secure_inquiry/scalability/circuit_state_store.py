"""Circuit breaker state model and storage protocol. Stores are injected; no global state."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol


class CircuitState(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"


@dataclass(frozen=True)
class CircuitBreakerState:
    """Persisted breaker state. Serialized as {"counter": int, "circuit_state": "CLOSED"|"OPEN"}."""

    failure_count: int = 0
    status: CircuitState = CircuitState.CLOSED

    def to_dict(self) -> Dict[str, Any]:
        return {"counter": self.failure_count, "circuit_state": self.status.value}

    @classmethod
    def from_dict(cls, data: Any) -> "CircuitBreakerState":
        """Parse persisted state. Raises ValueError if the record is malformed."""
        if not isinstance(data, dict):
            raise ValueError("circuit breaker state must be a JSON object")
        counter = data.get("counter")
        if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
            raise ValueError(f"invalid counter: {counter!r}")
        try:
            status = CircuitState(data.get("circuit_state"))
        except ValueError as e:
            raise ValueError(f"invalid circuit_state: {data.get('circuit_state')!r}") from e
        return cls(failure_count=counter, status=status)


class CircuitStateStore(Protocol):
    """Durable storage for one breaker's state. Implementations raise CircuitStatePersistenceError."""

    async def load(self) -> Optional[CircuitBreakerState]:
        """Return persisted state, or None if nothing has been stored yet."""
        ...

    async def save(self, state: CircuitBreakerState) -> None:
        """Persist state, replacing the previous record."""
        ...


class InMemoryCircuitStateStore:
    """Process-local store for tests and for deployments without durable state."""

    def __init__(self, initial: Optional[CircuitBreakerState] = None) -> None:
        self._state = initial
        self.save_count = 0

    async def load(self) -> Optional[CircuitBreakerState]:
        return self._state

    async def save(self, state: CircuitBreakerState) -> None:
        self._state = state
        self.save_count += 1
