"""Redis-backed audit repository. Entries are RPUSHed to one list: a true append-only log."""

import json
from typing import List, Optional

from redis.exceptions import RedisError

from secure_inquiry.governance.audit_models import AuditEntry
from secure_inquiry.governance.exceptions import AuditPersistenceError
from secure_inquiry.infrastructure.cache.redis_client import RedisClient

DEFAULT_AUDIT_KEY = "audit:entries"


class RedisAuditRepository:
    """Implements AuditRepository. RPUSH is atomic, so concurrent appenders need no local lock."""

    def __init__(self, redis_client: RedisClient, key: str = DEFAULT_AUDIT_KEY) -> None:
        self._redis = redis_client
        self._key = key

    async def append(self, entry: AuditEntry) -> None:
        try:
            await self._redis.rpush(self._key, json.dumps(entry.to_dict()))
        except (RedisError, OSError) as e:
            raise AuditPersistenceError(f"Cannot append to audit list {self._key}: {e}") from e

    async def list_entries(self) -> List[AuditEntry]:
        try:
            raw = await self._redis.lrange(self._key, 0, -1)
        except (RedisError, OSError) as e:
            raise AuditPersistenceError(f"Cannot read audit list {self._key}: {e}") from e
        try:
            return [AuditEntry.from_dict(json.loads(item)) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise AuditPersistenceError(f"Malformed entry in audit list {self._key}: {e}") from e

    async def get(self, entry_id: str) -> Optional[AuditEntry]:
        for entry in await self.list_entries():
            if entry.entry_id == entry_id:
                return entry
        return None

    async def health(self) -> dict:
        try:
            await self._redis.ping()
        except (RedisError, OSError) as e:
            return {"status": "error", "backend": "redis", "error": str(e)}
        return {"status": "ok", "backend": "redis"}
