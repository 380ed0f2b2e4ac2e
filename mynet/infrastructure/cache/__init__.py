"""Cache: stores, key builders, route TTL policy and write invalidation.

Used by the response cache middleware. Store choice comes from
mynet.core.config (cache_backend); key format is in keys.py (DRY).
"""

from mynet.core.config import Settings
from mynet.infrastructure.cache.cache_protocol import CacheStore
from mynet.infrastructure.cache.invalidation import (
    invalidate_cache_for_route,
    invalidation_patterns_for_path,
)
from mynet.infrastructure.cache.keys import (
    family_pattern,
    http_cache_key,
    resource_family_for_path,
    serialize_query,
)
from mynet.infrastructure.cache.memory_cache import InMemoryCacheStore
from mynet.infrastructure.cache.route_policy import (
    RouteCachePolicy,
    compile_route_pattern,
    get_ttl_for_route,
)


def build_cache_store(settings: Settings) -> CacheStore:
    """Return the configured store (not yet connected)."""
    if settings.cache_backend == "redis":
        from mynet.infrastructure.cache.redis_cache import RedisCacheStore

        return RedisCacheStore()
    return InMemoryCacheStore()


__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RouteCachePolicy",
    "build_cache_store",
    "compile_route_pattern",
    "family_pattern",
    "get_ttl_for_route",
    "http_cache_key",
    "invalidate_cache_for_route",
    "invalidation_patterns_for_path",
    "resource_family_for_path",
    "serialize_query",
]
