"""Cache store protocol used by the response cache middleware (DIP)."""

from typing import Any, Protocol


class CacheStore(Protocol):
    """Protocol for cache backends (in-memory or Redis).

    Implementations never raise on store failure from get/set/delete/
    invalidate_pattern; they log and report a miss or no-op instead.
    """

    async def connect(self) -> None:
        """Open connections. Call on app startup."""
        ...

    async def disconnect(self) -> None:
        """Release connections. Call on app shutdown."""
        ...

    def is_available(self) -> bool:
        """Return True if the store is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store JSON-serializable value with TTL in seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...

    async def invalidate_pattern(self, pattern: str) -> int:
        """Remove every key matching the glob pattern; return count removed."""
        ...

    async def clear_all(self) -> bool:
        """Remove every key."""
        ...

    async def stats(self) -> dict[str, Any]:
        """Return backend name, availability and entry count."""
        ...
