"""Cache administration API: stats, pattern invalidation, flush."""

from typing import Annotated

from fastapi import APIRouter, Depends

from mynet.api.v1.dependencies import get_cache_store, require_permissions
from mynet.application.dtos.principal import Principal
from mynet.domain.enums import Permission
from mynet.infrastructure.cache.cache_protocol import CacheStore
from mynet.schemas.cache import (
    CacheInvalidateRequest,
    CacheInvalidateResponse,
    CacheStatsResponse,
)

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(
    store: Annotated[CacheStore, Depends(get_cache_store)],
    _: Annotated[Principal, Depends(require_permissions(Permission.VIEW_DASHBOARD))],
):
    """Backend, availability and entry count of the response cache."""
    return CacheStatsResponse(**await store.stats())


@router.post("/invalidate", response_model=CacheInvalidateResponse)
async def invalidate_cache(
    body: CacheInvalidateRequest,
    store: Annotated[CacheStore, Depends(get_cache_store)],
    _: Annotated[Principal, Depends(require_permissions(Permission.MANAGE_SETTINGS))],
):
    """Evict every cached key matching a glob pattern."""
    deleted = await store.invalidate_pattern(body.pattern)
    return CacheInvalidateResponse(pattern=body.pattern, deleted=deleted)


@router.delete("", status_code=204)
async def clear_cache(
    store: Annotated[CacheStore, Depends(get_cache_store)],
    _: Annotated[Principal, Depends(require_permissions(Permission.MANAGE_SETTINGS))],
) -> None:
    """Flush the whole response cache."""
    await store.clear_all()
