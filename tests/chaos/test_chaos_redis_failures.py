"""
Chaos: Redis outage for circuit state and audit log.
System must: keep the breaker working in memory, surface audit failures as persistence errors,
report degraded health.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from secure_inquiry.application.exceptions import ExternalServiceError
from secure_inquiry.infrastructure.cache.audit_repository_redis import RedisAuditRepository
from secure_inquiry.infrastructure.cache.circuit_state_store_redis import RedisCircuitStateStore
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.scalability.circuit_state_store import CircuitState
from secure_inquiry.scalability.health_monitor import HealthMonitor


class DownRedis:
    """Backend that raises on every call (simulated Redis outage)."""

    async def get(self, key):
        raise RedisConnectionError("Redis connection refused")

    async def set(self, key, value):
        raise RedisConnectionError("Redis connection refused")

    async def rpush(self, key, value):
        raise RedisConnectionError("Redis connection refused")

    async def lrange(self, key, start=0, end=-1):
        raise RedisConnectionError("Redis connection refused")

    async def ping(self):
        raise RedisConnectionError("Redis connection refused")


async def fail():
    raise ExternalServiceError("down")


@pytest.mark.asyncio
async def test_breaker_keeps_protecting_during_redis_outage():
    cb = CircuitBreaker(
        RedisCircuitStateStore(DownRedis(), key="circuit_breaker:ai_service"),
        failure_threshold=2,
        cooldown_seconds=10.0,
        name="ai_service",
    )
    for _ in range(2):
        with pytest.raises(ExternalServiceError):
            await cb.execute(fail, "fallback")
    assert cb.state == CircuitState.OPEN
    assert cb.persistence_degraded
    await cb.aclose()


@pytest.mark.asyncio
async def test_health_reports_degraded_during_redis_outage():
    redis = DownRedis()
    cb = CircuitBreaker(RedisCircuitStateStore(redis), name="ai_service")
    monitor = HealthMonitor(
        circuit_breakers={"ai_service": cb},
        storage_checks={"audit_log": RedisAuditRepository(redis).health},
    )
    report = await monitor.system_health()
    assert report["status"] == "degraded"
    assert report["storage"]["audit_log"]["status"] == "error"
    assert report["circuit_breakers"]["ai_service"]["persistence_degraded"] is True
