"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the authenticated principal, the
authorization service and the cache store. Services are built once in
create_app() and read from app.state; routes never construct them.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mynet.application.dtos.principal import Principal
from mynet.application.services.authorization_service import AuthorizationService
from mynet.application.services.permission_resolver import PermissionResolver
from mynet.domain.exceptions import AuthenticationException, MyNetException
from mynet.infrastructure.cache.cache_protocol import CacheStore
from mynet.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


def get_permission_resolver(request: Request) -> PermissionResolver:
    """Permission resolver built at startup (immutable role map)."""
    return request.app.state.permission_resolver


def get_authorization_service(request: Request) -> AuthorizationService:
    """Authorization service built at startup."""
    return request.app.state.authorization_service


def get_cache_store(request: Request) -> CacheStore:
    """Response cache store; 503-style error when caching is disabled."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise MyNetException("Response cache is disabled", "CACHE_DISABLED")
    return cache


async def get_current_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ],
) -> Principal:
    """Decode the Bearer token into a Principal. 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    permissions = payload.get("permissions")
    return Principal(
        user_id=str(payload["sub"]),
        role=str(payload["role"]),
        custom_permissions=tuple(str(p) for p in permissions)
        if permissions is not None
        else None,
    )


def require_permissions(
    *permissions: Any,
) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: require auth and every listed permission."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        auth_svc.require_all_permissions(principal, permissions)
        return principal

    return _require


def require_any_permission(
    *permissions: Any,
) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: require auth and at least one listed permission."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        auth_svc.require_any_permission(principal, permissions)
        return principal

    return _require


def require_roles(*roles: Any) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: require auth and one of the listed roles."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        auth_svc.require_role(principal, roles)
        return principal

    return _require
