"""ResponseCacheMiddleware on a small app with a call-counting handler."""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from httpx import ASGITransport, AsyncClient

from mynet.core.config import RouteCacheGroup
from mynet.infrastructure.cache.memory_cache import InMemoryCacheStore
from mynet.infrastructure.cache.route_policy import RouteCachePolicy
from mynet.middleware.response_cache import ResponseCacheMiddleware

STRATEGY = {
    "Private": RouteCacheGroup(routes=["/api/messages", "/api/messages/*"], ttl=0),
    "Tenders": RouteCacheGroup(routes=["/api/tenders", "/api/tenders/:id"], ttl=120),
    "Search": RouteCacheGroup(routes=["/api/search", "/api/search/*"], ttl=60),
}


class FailingStore:
    """Store whose every operation raises."""

    async def get(self, key):
        raise ConnectionError("down")

    async def set(self, key, value, ttl=300):
        raise ConnectionError("down")

    async def invalidate_pattern(self, pattern):
        raise ConnectionError("down")


def build_app(store) -> tuple[FastAPI, dict[str, int]]:
    calls: dict[str, int] = {}
    app = FastAPI()

    def hit(name: str) -> int:
        calls[name] = calls.get(name, 0) + 1
        return calls[name]

    @app.get("/api/tenders")
    async def list_tenders(page: int = 1):
        return {"page": page, "call": hit("tenders")}

    @app.get("/api/tenders/{tender_id}")
    async def get_tender(tender_id: str):
        if tender_id == "missing":
            return JSONResponse({"error": "RESOURCE_NOT_FOUND"}, status_code=404)
        return {"id": tender_id, "call": hit(f"tender:{tender_id}")}

    @app.post("/api/tenders/{tender_id}")
    async def update_tender(tender_id: str):
        return {"id": tender_id, "updated": hit("update")}

    @app.put("/api/tenders/{tender_id}")
    @app.patch("/api/tenders/{tender_id}")
    @app.delete("/api/tenders/{tender_id}")
    async def change_tender(tender_id: str):
        return {"id": tender_id, "changed": hit("change")}

    @app.get("/api/search")
    async def search(q: str = ""):
        return {"q": q, "call": hit("search")}

    @app.get("/api/messages")
    async def messages():
        return {"call": hit("messages")}

    @app.get("/api/plain")
    async def plain():
        hit("plain")
        return PlainTextResponse("hello")

    app.add_middleware(
        ResponseCacheMiddleware, store=store, policy=RouteCachePolicy(STRATEGY)
    )
    return app, calls


@pytest.fixture
def store(clock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
async def cached_client(store) -> AsyncIterator[tuple[AsyncClient, dict[str, int]]]:
    app, calls = build_app(store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac, calls


async def test_miss_then_hit(cached_client) -> None:
    """Second identical GET is served from cache without calling the handler."""
    client, calls = cached_client
    first = await client.get("/api/tenders")
    second = await client.get("/api/tenders")

    assert first.headers["X-Cache"] == "MISS"
    assert second.headers["X-Cache"] == "HIT"
    assert second.json() == first.json() == {"page": 1, "call": 1}
    assert calls["tenders"] == 1


async def test_cache_headers(cached_client) -> None:
    client, _ = cached_client
    for _ in range(2):
        response = await client.get("/api/tenders/7")
        assert response.headers["Cache-Control"] == "public, max-age=120"
        assert response.headers["X-Cache-TTL"] == "120"


async def test_query_is_part_of_key(cached_client) -> None:
    client, calls = cached_client
    await client.get("/api/tenders", params={"page": 1})
    other = await client.get("/api/tenders", params={"page": 2})
    same = await client.get("/api/tenders?page=1")

    assert other.headers["X-Cache"] == "MISS"
    assert same.headers["X-Cache"] == "HIT"
    assert calls["tenders"] == 2


async def test_entry_expires_after_ttl(cached_client, clock) -> None:
    client, calls = cached_client
    await client.get("/api/search", params={"q": "pc"})
    clock.advance(60)
    response = await client.get("/api/search", params={"q": "pc"})

    assert response.headers["X-Cache"] == "MISS"
    assert calls["search"] == 2


async def test_tender_write_evicts_tenders_and_search(cached_client, store) -> None:
    client, calls = cached_client
    await client.get("/api/tenders")
    await client.get("/api/search", params={"q": "pc"})
    assert len(store) == 2

    response = await client.post("/api/tenders/5")
    assert response.status_code == 200
    assert "X-Cache" not in response.headers
    assert len(store) == 0

    after = await client.get("/api/tenders")
    assert after.headers["X-Cache"] == "MISS"
    assert calls["tenders"] == 2


@pytest.mark.parametrize(
    ("method", "expected"),
    [("PUT", "MISS"), ("DELETE", "MISS"), ("PATCH", "HIT")],
)
async def test_write_methods_and_invalidation(cached_client, method, expected) -> None:
    """PUT and DELETE evict the tenders family; PATCH leaves the cache alone."""
    client, calls = cached_client
    await client.get("/api/tenders")

    write = await client.request(method, "/api/tenders/1")
    after = await client.get("/api/tenders")

    assert write.status_code == 200
    assert "X-Cache" not in write.headers
    assert after.headers["X-Cache"] == expected
    assert calls["change"] == 1


async def test_head_and_options_do_not_invalidate(cached_client, store) -> None:
    client, _ = cached_client
    await client.get("/api/tenders")
    await client.head("/api/tenders")
    await client.options("/api/tenders")
    assert len(store) == 1


async def test_error_responses_are_not_cached(cached_client, store) -> None:
    client, _ = cached_client
    first = await client.get("/api/tenders/missing")
    second = await client.get("/api/tenders/missing")

    assert first.status_code == second.status_code == 404
    assert "X-Cache" not in second.headers
    assert len(store) == 0


async def test_zero_ttl_route_passes_through(cached_client) -> None:
    client, calls = cached_client
    await client.get("/api/messages")
    response = await client.get("/api/messages")

    assert calls["messages"] == 2
    assert "X-Cache" not in response.headers
    assert "Cache-Control" not in response.headers


async def test_non_json_response_is_not_cached(cached_client, store) -> None:
    client, calls = cached_client
    await client.get("/api/plain")
    response = await client.get("/api/plain")

    assert response.text == "hello"
    assert calls["plain"] == 2
    assert len(store) == 0


async def test_failing_store_never_breaks_requests() -> None:
    app, calls = build_app(FailingStore())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        first = await ac.get("/api/tenders")
        second = await ac.get("/api/tenders")
        write = await ac.post("/api/tenders/1")

    assert first.status_code == second.status_code == write.status_code == 200
    assert second.headers["X-Cache"] == "MISS"
    assert calls["tenders"] == 2
