"""
Key-value cache for rendered headline documents.
Redis when REDIS_URL is set, otherwise an in-process store (dev / tests).
"""

from typing import Callable, Dict, Optional, Tuple
import logging
import time

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60 * 60 * 24 * 30  # 30 days
DEFAULT_CACHE_PREFIX = "svg_"


def cache_key(headline: str, prefix: str = DEFAULT_CACHE_PREFIX) -> str:
    # Raw headline, no trimming or case folding
    return f"{prefix}{headline}"


class CacheStore:
    name = "base"

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    async def ping(self) -> bool:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class MemoryCacheStore(CacheStore):
    name = "memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        self.purge_expired(now)
        self._entries[key] = (value, now + ttl_seconds)

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Drop every expired entry, returns how many were removed"""
        if now is None:
            now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def ping(self) -> bool:
        return True

    def __len__(self):
        return len(self._entries)


class RedisCacheStore(CacheStore):
    name = "redis"

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 2.0) -> "RedisCacheStore":
        client = aioredis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self.client.set(key, value, ex=ttl_seconds)

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()


def build_cache_store(redis_url: Optional[str] = None) -> CacheStore:
    if redis_url:
        logger.info(f"[SVG] Using Redis cache at {redis_url}")
        return RedisCacheStore.from_url(redis_url)

    logger.warning("[SVG] REDIS_URL not set; using in-memory cache")
    return MemoryCacheStore()
