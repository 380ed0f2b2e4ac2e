"""Permission resolver bound to an explicit, immutable role -> permission map."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mynet.domain.permissions import (
    DEFAULT_ROLE_PERMISSION_MAP,
    RolePermissionMap,
    build_role_permission_map,
    has_all_permissions,
    has_any_permission,
    has_permission,
    permissions_for,
)


class PermissionResolver:
    """Answers permission checks for a role, or for a per-user custom list.

    Built once at startup and passed to the authorization service; the map
    it holds cannot be mutated afterwards. A custom permission list always
    wins outright over the role defaults.
    """

    def __init__(
        self,
        role_permissions: Mapping[Any, Iterable[Any]] | None = None,
    ) -> None:
        if role_permissions is None:
            self._role_permissions: RolePermissionMap = DEFAULT_ROLE_PERMISSION_MAP
        else:
            self._role_permissions = build_role_permission_map(role_permissions)

    @property
    def role_permissions(self) -> RolePermissionMap:
        """Read-only role code -> permission codes map."""
        return self._role_permissions

    def roles(self) -> list[str]:
        """Return the configured role codes in declaration order."""
        return list(self._role_permissions)

    def permissions_for(
        self, role: Any, custom_permissions: Iterable[Any] | None = None
    ) -> frozenset[str]:
        return permissions_for(role, custom_permissions, self._role_permissions)

    def has_permission(
        self,
        role: Any,
        permission: Any,
        custom_permissions: Iterable[Any] | None = None,
    ) -> bool:
        return has_permission(
            role, permission, custom_permissions, self._role_permissions
        )

    def has_any_permission(
        self,
        role: Any,
        permissions: Iterable[Any],
        custom_permissions: Iterable[Any] | None = None,
    ) -> bool:
        return has_any_permission(
            role, permissions, custom_permissions, self._role_permissions
        )

    def has_all_permissions(
        self,
        role: Any,
        permissions: Iterable[Any],
        custom_permissions: Iterable[Any] | None = None,
    ) -> bool:
        return has_all_permissions(
            role, permissions, custom_permissions, self._role_permissions
        )
