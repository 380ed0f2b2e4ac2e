"""Compile the configured cache route table and print TTLs for sample paths.

Usage:
    python -m scripts.check_cache_strategy [path ...]
Exits non-zero if any route pattern in CACHE_STRATEGY is invalid.
"""

import sys

from mynet.core.config import get_settings
from mynet.domain.exceptions import CacheConfigurationException
from mynet.infrastructure.cache.invalidation import invalidation_patterns_for_path
from mynet.infrastructure.cache.keys import resource_family_for_path
from mynet.infrastructure.cache.route_policy import RouteCachePolicy


def main() -> None:
    settings = get_settings()
    try:
        policy = RouteCachePolicy(
            settings.cache_strategy, default_ttl=settings.cache_default_ttl
        )
    except CacheConfigurationException as e:
        print(f"Invalid cache strategy: {e.message}", file=sys.stderr)
        sys.exit(1)

    for compiled in policy.routes:
        print(f"{compiled.group:<12} {compiled.ttl:>6}s  {compiled.route}")

    for path in sys.argv[1:]:
        matched = policy.match(path)
        print(
            f"\n{path}\n"
            f"  GET ttl:     {policy.get_ttl(path, 'GET')}s"
            f" ({matched.group if matched else 'default'})\n"
            f"  family:      {resource_family_for_path(path)}\n"
            f"  write evicts: {invalidation_patterns_for_path(path) or '-'}"
        )


if __name__ == "__main__":
    main()
