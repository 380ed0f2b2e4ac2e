"""Redis-based cache store shared across worker processes.

Provides async Redis caching with TTL support (SETEX). Pattern
invalidation uses SCAN + batched UNLINK so it never blocks the server.
Every Redis failure is logged and reported as a miss or no-op.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

import redis.asyncio as redis

from mynet.core.config import get_settings

logger = logging.getLogger(__name__)

_UNLINK_CHUNK_SIZE = 500


class RedisCacheStore:
    """Async Redis cache store implementing CacheStore.

    Uses mynet.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown. While Redis is unreachable every
    call is a no-op, and the next call after REDIS_RECONNECT_INTERVAL_SECONDS
    tries to connect again.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache store.

        Args:
            redis_client: Optional Redis client for testing or DI.
            clock: Monotonic seconds source for reconnect pacing.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None
        self._clock = clock
        self._started = False
        self._last_connect_attempt: float | None = None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        self._started = True
        if self.redis is None:
            self._last_connect_attempt = self._clock()
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_keepalive=True,
                )
                await self.redis.ping()
                self._connected = True
                logger.info(
                    "Redis cache connected: %s:%s",
                    self.settings.redis_host,
                    self.settings.redis_port,
                )
            except redis.RedisError as e:
                logger.warning(
                    "Redis connection failed: %s. Response cache bypassed until reconnect.",
                    e,
                )
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        self._started = False
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client (if any) and connect again. Returns True if connected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
            self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    async def _ensure_available(self) -> bool:
        """Return True if usable, reconnecting at most once per reconnect interval.

        A store that was never started, or was disconnected at shutdown, is
        not reconnected.
        """
        if self.is_available():
            return True
        if not self._started:
            return False
        if (
            self._last_connect_attempt is not None
            and self._clock() - self._last_connect_attempt
            < self.settings.redis_reconnect_interval_seconds
        ):
            return False
        return await self._reconnect()

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        if not await self._ensure_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect():
                logger.warning("Cache get unavailable for key %s (Redis disconnected)", key)
                return None
            try:
                value = await self.redis.get(key)
            except redis.RedisError:
                logger.exception("Cache get error for key %s after reconnect", key)
                return None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""
        if ttl <= 0 or not await self._ensure_available() or self.redis is None:
            return False
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s: value not JSON-serializable", key)
            return False
        try:
            await self.redis.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    await self.redis.setex(key, ttl, serialized)
                    return True
                except redis.RedisError:
                    logger.exception("Cache set error for key %s after reconnect", key)
                    return False
            logger.warning("Cache set unavailable for key %s (Redis disconnected)", key)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if deleted."""
        if not await self._ensure_available() or self.redis is None:
            return False
        try:
            return bool(await self.redis.delete(key))
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False

    async def _unlink(self, keys: list[str]) -> int:
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)

    async def invalidate_pattern(self, pattern: str, _retry: bool = True) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK.

        Args:
            pattern: Redis SCAN match pattern (e.g. tenders:*).

        Returns:
            Number of keys deleted.
        """
        if not await self._ensure_available() or self.redis is None:
            return 0
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _UNLINK_CHUNK_SIZE:
                    deleted += await self._unlink(chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(chunk)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted
        except (redis.ConnectionError, redis.TimeoutError):
            if _retry and await self._reconnect():
                return await self.invalidate_pattern(pattern, _retry=False)
            logger.warning(
                "Cache invalidate_pattern unavailable for %s (Redis disconnected)", pattern
            )
            return deleted
        except redis.RedisError:
            logger.exception("Cache invalidate_pattern error for %s", pattern)
            return deleted

    async def clear_all(self) -> bool:
        """Clear the configured Redis database. Use with caution."""
        if not await self._ensure_available() or self.redis is None:
            return False
        try:
            await self.redis.flushdb()
            logger.warning("Cache CLEARED: all keys deleted")
            return True
        except redis.RedisError:
            logger.exception("Cache clear error")
            return False

    async def stats(self) -> dict[str, Any]:
        """Return backend name, availability and key count (DBSIZE)."""
        entries: int | None = None
        if self.is_available() and self.redis is not None:
            try:
                entries = int(await self.redis.dbsize())
            except redis.RedisError:
                logger.exception("Cache stats error")
        return {"backend": "redis", "available": self.is_available(), "entries": entries}
