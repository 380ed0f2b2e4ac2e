"""Process-local cache store with lazy TTL expiry.

Entries are stored JSON-serialized, so a cached value can never be mutated
through a reference held by a caller. Expiry is checked at read time
(created_at + ttl against the clock); purge_expired() is an optional sweep
for memory hygiene only.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Serialized value plus creation timestamp and TTL (seconds)."""

    payload: str
    created_at: float
    ttl: int

    def is_expired(self, now: float) -> bool:
        return now >= self.created_at + self.ttl


class InMemoryCacheStore:
    """Dict-backed cache store implementing CacheStore.

    Single event loop, no locks: entries are replaced whole, never mutated,
    so concurrent misses on one key simply end with the last write.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store.

        Args:
            clock: Monotonic seconds source; injectable for tests.
        """
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    async def connect(self) -> None:
        logger.info("In-memory response cache ready")

    async def disconnect(self) -> None:
        self._entries.clear()

    def is_available(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(entry.payload)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        if ttl <= 0:
            return False
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache set skipped for key %s: value not JSON-serializable", key)
            return False
        self._entries[key] = CacheEntry(payload=payload, created_at=self._clock(), ttl=ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def invalidate_pattern(self, pattern: str) -> int:
        matched = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
        for key in matched:
            del self._entries[key]
        if matched:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(matched))
        return len(matched)

    async def clear_all(self) -> bool:
        self._entries.clear()
        logger.warning("Cache CLEARED: all keys deleted")
        return True

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns number removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cache SWEEP: %s expired keys removed", len(expired))
        return len(expired)

    async def stats(self) -> dict[str, Any]:
        return {"backend": "memory", "available": True, "entries": len(self._entries)}
