"""Permissions API: role defaults, caller's effective permissions, checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from mynet.api.v1.dependencies import (
    get_authorization_service,
    get_current_principal,
    get_permission_resolver,
    require_permissions,
)
from mynet.application.dtos.principal import Principal
from mynet.application.services.authorization_service import AuthorizationService
from mynet.application.services.permission_resolver import PermissionResolver
from mynet.domain.enums import Permission
from mynet.domain.exceptions import ResourceNotFoundException
from mynet.schemas.permission import (
    EffectivePermissionsResponse,
    PermissionCheckRequest,
    PermissionCheckResponse,
    RolePermissionsResponse,
)

router = APIRouter()


def _ordered(codes: frozenset[str]) -> list[str]:
    """Permission codes in enum declaration order, unknown codes last (sorted)."""
    known = [p.value for p in Permission if p.value in codes]
    return known + sorted(codes.difference(known))


@router.get("/roles", response_model=list[RolePermissionsResponse])
async def list_role_permissions(
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
):
    """Default permissions of every role."""
    return [
        RolePermissionsResponse(role=role, permissions=_ordered(perms))
        for role, perms in resolver.role_permissions.items()
    ]


@router.get("/roles/{role}", response_model=RolePermissionsResponse)
async def get_role_permissions(
    role: str,
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
):
    """Default permissions of one role."""
    if role not in resolver.role_permissions:
        raise ResourceNotFoundException("Role", role)
    return RolePermissionsResponse(
        role=role, permissions=_ordered(resolver.role_permissions[role])
    )


@router.get("/me", response_model=EffectivePermissionsResponse)
async def get_my_permissions(
    principal: Annotated[Principal, Depends(get_current_principal)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Effective permissions of the authenticated caller."""
    return EffectivePermissionsResponse(
        user_id=principal.user_id,
        role=principal.role,
        custom=principal.custom_permissions is not None,
        permissions=_ordered(auth_svc.effective_permissions(principal)),
    )


@router.post("/check", response_model=PermissionCheckResponse)
async def check_permissions(
    body: PermissionCheckRequest,
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    _: Annotated[Principal, Depends(require_permissions(Permission.MANAGE_USERS))],
):
    """Evaluate a role (or custom grant list) against permissions."""
    results = {
        p: resolver.has_permission(body.role, p, body.custom_permissions)
        for p in body.permissions
    }
    if body.mode == "any":
        granted = resolver.has_any_permission(
            body.role, body.permissions, body.custom_permissions
        )
    else:
        granted = resolver.has_all_permissions(
            body.role, body.permissions, body.custom_permissions
        )
    return PermissionCheckResponse(granted=granted, mode=body.mode, results=results)
