"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
services from mynet.api.v1.dependencies (built once in create_app).
"""

from fastapi import APIRouter

from mynet.api.v1.endpoints import cache, health, permissions

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
