"""
Read-through cache with write-through invalidation.

Every backend implements ICache. The cache is best-effort: a missing or
failing backend degrades to a miss (reads) or a no-op (writes) and never
raises into the caller.

Backends:
    - NullCache: always misses
    - InMemoryCache: process-local dict with TTL expiry and glob patterns
    - RedisCache: redis.asyncio with JSON-encoded values
"""

import fnmatch
import json
import logging
import time
from typing import Any, Optional, Protocol, runtime_checkable

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from .config import get_settings

logger = logging.getLogger(__name__)


# Cache keys shared by the debate, vote and persona services
DEBATE_LIST_KEY = "debates:all"
DEBATE_LIST_PATTERN = "debates:*"


def debate_key(debate_id: str) -> str:
    return f"debate:{debate_id}"


def debate_arguments_key(debate_id: str) -> str:
    return f"debate:{debate_id}:arguments"


@runtime_checkable
class ICache(Protocol):
    """Interface every cache backend exposes."""

    name: str

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on miss or expiry."""
        ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a JSON-serializable value for ttl_seconds."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a single key."""
        ...

    async def delete_pattern(self, pattern: str) -> None:
        """Remove every key matching a glob pattern (e.g. ``debates:*``)."""
        ...


class NullCache:
    """Cache that stores nothing."""

    name = "none"

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None

    async def delete_pattern(self, pattern: str) -> None:
        return None


class InMemoryCache:
    """
    Process-local cache with per-key TTL.

    Values are stored JSON-encoded so callers get a fresh copy on every read,
    matching what a network cache would hand back.
    """

    name = "memory"

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at <= time.monotonic():
            self._entries.pop(key, None)
            return None
        return json.loads(payload)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = (time.monotonic() + ttl_seconds, json.dumps(value))

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def delete_pattern(self, pattern: str) -> None:
        for key in [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Redis-backed cache. Connection errors are logged and treated as misses."""

    name = "redis"

    def __init__(self, client: aioredis.Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[Any]:
        try:
            data = await self._redis.get(key)
        except RedisError as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None
        return json.loads(data) if data else None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            await self._redis.setex(key, ttl_seconds, json.dumps(value))
        except RedisError as e:
            logger.warning("Cache set failed for %s: %s", key, e)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            logger.warning("Cache delete failed for %s: %s", key, e)

    async def delete_pattern(self, pattern: str) -> None:
        try:
            keys = [key async for key in self._redis.scan_iter(match=pattern)]
            if keys:
                await self._redis.delete(*keys)
        except RedisError as e:
            logger.warning("Cache pattern invalidation failed for %s: %s", pattern, e)


async def invalidate_debate(
    cache: ICache,
    debate_id: str,
    include_arguments: bool = True,
) -> None:
    """Drop the cached debate, optionally its argument list, and all list views."""
    if include_arguments:
        await cache.delete(debate_arguments_key(debate_id))
    await cache.delete(debate_key(debate_id))
    await cache.delete_pattern(DEBATE_LIST_PATTERN)


_cache_instance: Optional[ICache] = None


def get_cache() -> ICache:
    """
    Get the cache singleton.

    Uses Redis when REDIS_URL is configured, otherwise the in-process cache.
    """
    global _cache_instance
    if _cache_instance is None:
        settings = get_settings()
        if settings.redis_url:
            _cache_instance = RedisCache.from_url(settings.redis_url)
        else:
            _cache_instance = InMemoryCache()
        logger.info("Using %s cache", _cache_instance.name)
    return _cache_instance


def reset_cache() -> None:
    """Reset the cache singleton (for testing)."""
    global _cache_instance
    _cache_instance = None
