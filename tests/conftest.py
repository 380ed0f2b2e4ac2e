"""Pytest configuration and fixtures for mynet.

Environment is set before mynet.main is imported so that settings
validation (SECRET_KEY) passes and the in-memory cache backend is used.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-mynet-tests")
os.environ["CACHE_BACKEND"] = "memory"
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import AsyncIterator, Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from mynet.core.config import get_settings  # noqa: E402
from mynet.infrastructure.security.jwt import create_access_token  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app() -> FastAPI:
    """Fresh application per test (fresh in-memory cache)."""
    get_settings.cache_clear()
    from mynet.main import create_app

    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_auth_headers() -> Callable[..., dict[str, str]]:
    """Build Authorization headers for a role and optional custom permissions."""

    def _make(
        role: str,
        permissions: list[str] | None = None,
        user_id: str = "user-1",
    ) -> dict[str, str]:
        claims: dict = {"sub": user_id, "role": role}
        if permissions is not None:
            claims["permissions"] = permissions
        return {"Authorization": f"Bearer {create_access_token(claims)}"}

    return _make
