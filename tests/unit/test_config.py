"""Settings validation and the configurable cache route table."""

import json

import pytest
from pydantic import ValidationError

from mynet.core.config import RouteCacheGroup, Settings, default_cache_strategy


def test_secret_key_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "")
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(_env_file=None)


def test_unknown_cache_backend_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_BACKEND", "memcached")
    with pytest.raises(ValidationError, match="cache_backend"):
        Settings(_env_file=None)


def test_default_strategy_is_used(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CACHE_STRATEGY", raising=False)
    settings = Settings(_env_file=None)
    assert list(settings.cache_strategy) == list(default_cache_strategy())
    assert settings.cache_strategy["Tenders"].ttl == 120


def test_strategy_from_env_accepts_routes_and_ttl_keys(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv(
        "CACHE_STRATEGY",
        json.dumps({"Fast": {"Routes": ["/api/ping"], "TTL": 5}}),
    )
    settings = Settings(_env_file=None)
    assert settings.cache_strategy == {
        "Fast": RouteCacheGroup(routes=["/api/ping"], ttl=5)
    }


def test_negative_group_ttl_is_rejected() -> None:
    with pytest.raises(ValidationError):
        RouteCacheGroup(routes=["/x"], ttl=-1)


def test_negative_ttl_in_env_strategy_fails_at_load(monkeypatch: pytest.MonkeyPatch) -> None:
    """Group TTLs are validated when settings load, before any policy is built."""
    monkeypatch.setenv(
        "CACHE_STRATEGY", json.dumps({"Bad": {"Routes": ["/api/x"], "TTL": -5}})
    )
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
