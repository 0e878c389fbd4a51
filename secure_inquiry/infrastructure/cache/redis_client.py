# secure_inquiry/infrastructure/cache/redis_client.py

import redis.asyncio as redis

from secure_inquiry.config.settings import get_settings


class RedisClient:
    def __init__(self, url: str | None = None):
        self.client = redis.from_url(
            url or get_settings().redis_url,
            decode_responses=True,
        )

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def set(self, key: str, value: str) -> None:
        """Set key to value without expiry."""
        await self.client.set(key, value)

    async def rpush(self, key: str, value: str) -> int:
        """Append value to the list at key. Returns the new list length."""
        return await self.client.rpush(key, value)

    async def lrange(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        """Return list elements between start and end (inclusive)."""
        return await self.client.lrange(key, start, end)

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()
