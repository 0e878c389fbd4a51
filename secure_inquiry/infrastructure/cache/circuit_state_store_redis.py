"""Redis-backed circuit breaker state. Single key, JSON value, no TTL."""

import json
from typing import Optional

from redis.exceptions import RedisError

from secure_inquiry.infrastructure.cache.redis_client import RedisClient
from secure_inquiry.scalability.circuit_state_store import CircuitBreakerState
from secure_inquiry.scalability.exceptions import CircuitStatePersistenceError

DEFAULT_STATE_KEY = "circuit_breaker:default"


class RedisCircuitStateStore:
    """Implements CircuitStateStore on one Redis key."""

    def __init__(self, redis_client: RedisClient, key: str = DEFAULT_STATE_KEY) -> None:
        self._redis = redis_client
        self._key = key

    async def load(self) -> Optional[CircuitBreakerState]:
        try:
            raw = await self._redis.get(self._key)
        except (RedisError, OSError) as e:
            raise CircuitStatePersistenceError(f"Cannot read circuit state key {self._key}: {e}") from e
        if not raw:
            return None
        try:
            return CircuitBreakerState.from_dict(json.loads(raw))
        except ValueError as e:
            raise CircuitStatePersistenceError(f"Corrupt circuit state at {self._key}: {e}") from e

    async def save(self, state: CircuitBreakerState) -> None:
        try:
            await self._redis.set(self._key, json.dumps(state.to_dict()))
        except (RedisError, OSError) as e:
            raise CircuitStatePersistenceError(f"Cannot write circuit state key {self._key}: {e}") from e
