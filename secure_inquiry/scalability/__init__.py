"""Scalability layer: persisted circuit breaker and health aggregation. No FastAPI."""

from secure_inquiry.scalability.circuit_breaker import CircuitBreaker, CircuitBreakerResult
from secure_inquiry.scalability.circuit_state_store import (
    CircuitBreakerState,
    CircuitState,
    CircuitStateStore,
    InMemoryCircuitStateStore,
)
from secure_inquiry.scalability.health_monitor import HealthMonitor

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerResult",
    "CircuitBreakerState",
    "CircuitState",
    "CircuitStateStore",
    "HealthMonitor",
    "InMemoryCircuitStateStore",
]
