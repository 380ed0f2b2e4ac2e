"""Response cache middleware.

GET responses are cached per method + path + query with a TTL taken from
the route table; POST/PUT/DELETE evict the related resource families
before the handler runs. The cache store is injected; any store failure
is logged and handled as a miss so caching never breaks an endpoint.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from starlette.responses import JSONResponse

from mynet.core.constants import (
    CACHE_STATUS_HIT,
    CACHE_STATUS_MISS,
    HEADER_CACHE_CONTROL,
    HEADER_X_CACHE,
    HEADER_X_CACHE_TTL,
    INVALIDATING_METHODS,
)
from mynet.infrastructure.cache.cache_protocol import CacheStore
from mynet.infrastructure.cache.invalidation import invalidate_cache_for_route
from mynet.infrastructure.cache.keys import http_cache_key, resource_family_for_path
from mynet.infrastructure.cache.route_policy import RouteCachePolicy
from mynet.shared.telemetry.tracing import annotate_cache_lookup, cache_span

logger = logging.getLogger(__name__)


def _is_json(headers: list[tuple[bytes, bytes]]) -> bool:
    for name, value in headers:
        if name.lower() == b"content-type":
            return value.split(b";", 1)[0].strip().lower() == b"application/json"
    return False


async def _safe_get(store: CacheStore, key: str) -> Any | None:
    try:
        return await store.get(key)
    except Exception as e:
        logger.warning("Cache read failed for %s, treating as miss: %s", key, e)
        return None


async def _safe_set(store: CacheStore, key: str, value: Any, ttl: int) -> None:
    try:
        await store.set(key, value, ttl=ttl)
    except Exception as e:
        logger.warning("Cache write failed for %s, response not cached: %s", key, e)


def ResponseCacheMiddleware(
    app: Callable,
    store: CacheStore,
    policy: RouteCachePolicy | None = None,
) -> Callable:
    """Serve cached GET responses and invalidate on writes. Raw ASGI.

    Args:
        app: Downstream ASGI app.
        store: Cache store (in-memory or Redis).
        policy: Route TTL policy; default route table when None.
    """
    resolved_policy = policy if policy is not None else RouteCachePolicy()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        method = scope["method"].upper()
        path = scope["path"]

        if method != "GET":
            if method in INVALIDATING_METHODS:
                with cache_span("invalidate", {"http.path": path}) as span:
                    patterns = await invalidate_cache_for_route(store, path)
                    span.set_attribute("cache.patterns", patterns)
            await app(scope, receive, send)
            return

        ttl = resolved_policy.get_ttl(path, method)
        if ttl == 0:
            await app(scope, receive, send)
            return

        key = http_cache_key(method, path, scope.get("query_string", b""))
        family = resource_family_for_path(path)
        cache_headers = {
            HEADER_CACHE_CONTROL: f"public, max-age={ttl}",
            HEADER_X_CACHE_TTL: str(ttl),
        }

        cached = await _safe_get(store, key)
        if cached is not None:
            annotate_cache_lookup(CACHE_STATUS_HIT, ttl, family)
            response = JSONResponse(
                cached, headers={HEADER_X_CACHE: CACHE_STATUS_HIT, **cache_headers}
            )
            await response(scope, receive, send)
            return

        annotate_cache_lookup(CACHE_STATUS_MISS, ttl, family)
        capture = False
        body_parts: list[bytes] = []
        extra_headers = [(k.encode(), v.encode()) for k, v in cache_headers.items()]

        async def send_wrapper(message: dict) -> None:
            nonlocal capture
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                capture = message["status"] == 200 and _is_json(headers)
                if capture:
                    headers.append((HEADER_X_CACHE.encode(), CACHE_STATUS_MISS.encode()))
                headers.extend(extra_headers)
                message["headers"] = headers
            elif message["type"] == "http.response.body" and capture:
                body_parts.append(message.get("body", b""))
                if not message.get("more_body", False):
                    try:
                        payload = json.loads(b"".join(body_parts))
                    except ValueError:
                        logger.debug("Response for %s is not valid JSON; not cached", key)
                    else:
                        await _safe_set(store, key, payload, ttl)
                    body_parts.clear()
                    capture = False
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
