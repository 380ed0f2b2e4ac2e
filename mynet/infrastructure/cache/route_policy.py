"""Route pattern -> TTL resolution for the response cache.

Route syntax: ``:param`` matches one path segment, ``*`` matches anything
(including slashes); all other characters are regular-expression text.
Patterns are anchored (full match). The whole table is compiled when the
policy is built so a bad pattern stops the app at startup, not mid-request.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from mynet.core.config import RouteCacheGroup, default_cache_strategy
from mynet.core.constants import WRITE_METHODS
from mynet.domain.exceptions import CacheConfigurationException

DEFAULT_GET_TTL = 300

_PARAM_TOKEN = re.compile(r":[A-Za-z0-9_]+")


def compile_route_pattern(route: str) -> re.Pattern[str]:
    """Convert a route pattern into an anchored regular expression.

    Args:
        route: Route such as ``/api/tenders/:id`` or ``/api/admin/*``.

    Returns:
        Compiled pattern; use ``fullmatch`` against a request path.

    Raises:
        CacheConfigurationException: If the result is not a valid regex.
    """
    pattern = _PARAM_TOKEN.sub("[^/]+", route).replace("*", ".*")
    try:
        return re.compile(f"^{pattern}$")
    except re.error as e:
        raise CacheConfigurationException(
            f"Invalid cache route pattern {route!r}: {e}", route=route
        ) from e


@dataclass(frozen=True)
class CompiledRoute:
    """One compiled route with its group label and TTL."""

    group: str
    route: str
    pattern: re.Pattern[str]
    ttl: int

    def matches(self, path: str) -> bool:
        return self.pattern.fullmatch(path) is not None


class RouteCachePolicy:
    """Resolves the cache TTL for a request from the route table.

    First matching route wins, scanning groups then routes in declaration
    order. Write methods are never cached.
    """

    def __init__(
        self,
        strategy: Mapping[str, RouteCacheGroup] | None = None,
        default_ttl: int = DEFAULT_GET_TTL,
    ) -> None:
        if default_ttl < 0:
            raise CacheConfigurationException("Default cache TTL must be >= 0")
        if strategy is None:
            strategy = default_cache_strategy()
        self.default_ttl = default_ttl
        self._routes: tuple[CompiledRoute, ...] = tuple(
            CompiledRoute(
                group=label,
                route=route,
                pattern=compile_route_pattern(route),
                ttl=group.ttl,
            )
            for label, group in strategy.items()
            for route in group.routes
        )

    @property
    def routes(self) -> tuple[CompiledRoute, ...]:
        return self._routes

    def match(self, path: str) -> CompiledRoute | None:
        """Return the first configured route matching path, or None."""
        for compiled in self._routes:
            if compiled.matches(path):
                return compiled
        return None

    def get_ttl(self, path: str, method: str) -> int:
        """Return TTL in seconds for path/method; 0 means do not cache."""
        method = method.upper()
        if method in WRITE_METHODS:
            return 0
        compiled = self.match(path)
        if compiled is not None:
            return compiled.ttl
        return self.default_ttl if method == "GET" else 0


def get_ttl_for_route(
    path: str, method: str, policy: RouteCachePolicy | None = None
) -> int:
    """Return TTL for path/method using policy (default route table if None)."""
    if policy is None:
        policy = RouteCachePolicy()
    return policy.get_ttl(path, method)
