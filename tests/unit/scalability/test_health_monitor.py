"""HealthMonitor: aggregates storage checks and circuit breaker states."""

import pytest

from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.scalability.circuit_state_store import (
    CircuitBreakerState,
    CircuitState,
    InMemoryCircuitStateStore,
)
from secure_inquiry.scalability.exceptions import CircuitStatePersistenceError
from secure_inquiry.scalability.health_monitor import HealthMonitor


async def healthy():
    return {"status": "ok", "backend": "file"}


async def unhealthy():
    return {"status": "error", "backend": "redis", "error": "refused"}


async def exploding():
    raise ConnectionError("refused")


@pytest.mark.asyncio
async def test_healthy_system():
    breaker = CircuitBreaker(InMemoryCircuitStateStore(), name="ai_service")
    monitor = HealthMonitor(
        circuit_breakers={"ai_service": breaker},
        storage_checks={"audit_log": healthy},
    )
    report = await monitor.system_health()
    assert report["status"] == "ok"
    assert report["storage"]["audit_log"]["status"] == "ok"
    assert report["circuit_breakers"]["ai_service"] == {
        "state": "CLOSED",
        "failure_count": 0,
        "persistence_degraded": False,
    }


@pytest.mark.asyncio
async def test_persisted_open_state_is_reported():
    store = InMemoryCircuitStateStore(CircuitBreakerState(3, CircuitState.OPEN))
    breaker = CircuitBreaker(store, cooldown_seconds=10.0, name="ai_service")
    monitor = HealthMonitor(circuit_breakers={"ai_service": breaker})
    report = await monitor.system_health()
    assert report["circuit_breakers"]["ai_service"]["state"] == "OPEN"
    assert report["circuit_breakers"]["ai_service"]["failure_count"] == 3
    await breaker.aclose()


@pytest.mark.asyncio
async def test_storage_error_status_degrades():
    monitor = HealthMonitor(storage_checks={"audit_log": unhealthy})
    report = await monitor.system_health()
    assert report["status"] == "degraded"


@pytest.mark.asyncio
async def test_raising_storage_check_degrades():
    monitor = HealthMonitor(storage_checks={"audit_log": exploding})
    report = await monitor.system_health()
    assert report["status"] == "degraded"
    assert report["storage"]["audit_log"] == {"status": "error", "error": "refused"}


@pytest.mark.asyncio
async def test_breaker_persistence_degradation_degrades():
    class UnreadableStore(InMemoryCircuitStateStore):
        async def load(self):
            raise CircuitStatePersistenceError("corrupt")

    breaker = CircuitBreaker(UnreadableStore(), name="ai_service")
    monitor = HealthMonitor(circuit_breakers={"ai_service": breaker})
    report = await monitor.system_health()
    assert report["status"] == "degraded"
    assert report["circuit_breakers"]["ai_service"]["persistence_degraded"] is True
