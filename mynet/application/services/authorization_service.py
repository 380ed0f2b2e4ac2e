"""Authorization service: permission and role checks for an authenticated Principal."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from mynet.application.dtos.principal import Principal
from mynet.application.services.permission_resolver import PermissionResolver
from mynet.domain.exceptions import AuthorizationException

logger = logging.getLogger(__name__)


def _codes(values: Iterable[Any]) -> list[str]:
    return [v.value if isinstance(v, Enum) else str(v) for v in values]


class AuthorizationService:
    """Centralized permission checking on top of PermissionResolver."""

    def __init__(self, permission_resolver: PermissionResolver) -> None:
        self.permission_resolver = permission_resolver

    def effective_permissions(self, principal: Principal) -> frozenset[str]:
        """Return the permission codes the principal holds."""
        return self.permission_resolver.permissions_for(
            principal.role, principal.custom_permissions
        )

    def check_permission(self, principal: Principal, permission: Any) -> bool:
        return self.permission_resolver.has_permission(
            principal.role, permission, principal.custom_permissions
        )

    def require_permission(self, principal: Principal, permission: Any) -> None:
        """Raise AuthorizationException if the principal lacks the permission."""
        self.require_all_permissions(principal, [permission])

    def require_all_permissions(
        self, principal: Principal, permissions: Iterable[Any]
    ) -> None:
        """Raise AuthorizationException unless every permission is granted."""
        permissions = list(permissions)
        if not self.permission_resolver.has_all_permissions(
            principal.role, permissions, principal.custom_permissions
        ):
            logger.info(
                "Permission denied for user %s (role %s): requires all of %s",
                principal.user_id,
                principal.role,
                _codes(permissions),
            )
            raise AuthorizationException(permissions=_codes(permissions))

    def require_any_permission(
        self, principal: Principal, permissions: Iterable[Any]
    ) -> None:
        """Raise AuthorizationException unless at least one permission is granted."""
        permissions = list(permissions)
        if not self.permission_resolver.has_any_permission(
            principal.role, permissions, principal.custom_permissions
        ):
            logger.info(
                "Permission denied for user %s (role %s): requires any of %s",
                principal.user_id,
                principal.role,
                _codes(permissions),
            )
            raise AuthorizationException(permissions=_codes(permissions))

    def require_role(self, principal: Principal, roles: Iterable[Any]) -> None:
        """Raise AuthorizationException if the principal's role is not listed."""
        allowed = _codes(roles)
        if principal.role not in allowed:
            raise AuthorizationException(roles=allowed, message="Role not allowed")
