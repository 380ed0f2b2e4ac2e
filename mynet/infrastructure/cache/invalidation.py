"""Write-driven invalidation of cached responses by resource family.

A write whose path contains a family keyword (substring test) evicts
every key of that family. Tender writes also evict search results,
which embed tender data. One path can hit several families.
"""

from __future__ import annotations

import logging

from mynet.core.constants import CASCADE_FAMILIES, WRITE_FAMILIES
from mynet.infrastructure.cache.cache_protocol import CacheStore
from mynet.infrastructure.cache.keys import family_pattern

logger = logging.getLogger(__name__)


def invalidation_patterns_for_path(path: str) -> list[str]:
    """Return the glob patterns a write to path must evict, in rule order."""
    patterns: list[str] = []
    for family, keywords in WRITE_FAMILIES:
        if not any(keyword in path for keyword in keywords):
            continue
        for evicted in (family, *CASCADE_FAMILIES.get(family, ())):
            pattern = family_pattern(evicted)
            if pattern not in patterns:
                patterns.append(pattern)
    return patterns


async def invalidate_cache_for_route(store: CacheStore, path: str) -> list[str]:
    """Evict cached responses related to a write on path.

    Store failures are logged and skipped so a write request is never
    blocked by the cache.

    Returns:
        Patterns that were sent to the store.
    """
    patterns = invalidation_patterns_for_path(path)
    for pattern in patterns:
        try:
            await store.invalidate_pattern(pattern)
        except Exception as e:
            logger.warning("Cache invalidation failed for %s: %s", pattern, e)
    if patterns:
        logger.debug("Write to %s invalidated %s", path, patterns)
    return patterns
