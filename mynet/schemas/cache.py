"""Cache administration API schemas."""

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Store backend, availability and entry count (None when unknown)."""

    backend: str
    available: bool
    entries: int | None = None


class CacheInvalidateRequest(BaseModel):
    """Glob pattern of keys to evict (e.g. tenders:*)."""

    pattern: str = Field(..., min_length=1, max_length=256)


class CacheInvalidateResponse(BaseModel):
    pattern: str
    deleted: int
