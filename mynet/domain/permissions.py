"""Role to permission map and pure permission checks.

Resolution rule: when a custom permission list is given (per-admin
grants), membership in that list is the whole answer and the role's
defaults are ignored, never merged. Otherwise the role's default set is
consulted; unknown roles get the empty set. Checks never raise.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from mynet.domain.enums import Permission, Role

RolePermissionMap = Mapping[str, frozenset[str]]

_BUYER = (
    Permission.VIEW_DASHBOARD,
    Permission.CREATE_TENDER,
    Permission.VIEW_TENDER,
    Permission.EDIT_TENDER,
    Permission.VIEW_OFFER,
    Permission.APPROVE_OFFER,
    Permission.REJECT_OFFER,
    Permission.CREATE_PURCHASE_ORDER,
    Permission.VIEW_PURCHASE_ORDER,
    Permission.VIEW_REPORTS,
)

_SUPPLIER = (
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_TENDER,
    Permission.SUBMIT_OFFER,
    Permission.VIEW_OFFER,
    Permission.VIEW_PURCHASE_ORDER,
)

_ACCOUNTANT = (
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_TENDER,
    Permission.VIEW_OFFER,
    Permission.VIEW_PURCHASE_ORDER,
    Permission.MANAGE_INVOICES,
    Permission.VIEW_REPORTS,
)

_VIEWER = (
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_TENDER,
    Permission.VIEW_OFFER,
    Permission.VIEW_PURCHASE_ORDER,
    Permission.VIEW_REPORTS,
)

# Ordered defaults per role. Admin grants are per user (custom list).
ROLE_PERMISSIONS: Mapping[Role, tuple[Permission, ...]] = MappingProxyType(
    {
        Role.SUPER_ADMIN: tuple(Permission),
        Role.ADMIN: (),
        Role.BUYER: _BUYER,
        Role.SUPPLIER: _SUPPLIER,
        Role.ACCOUNTANT: _ACCOUNTANT,
        Role.VIEWER: _VIEWER,
    }
)


def _code(value: Any) -> str | None:
    """Return the plain string code of a role/permission, or None if not one."""
    if isinstance(value, Enum):
        value = value.value
    return value if isinstance(value, str) else None


def build_role_permission_map(
    role_permissions: Mapping[Any, Iterable[Any]] = ROLE_PERMISSIONS,
) -> RolePermissionMap:
    """Freeze a role -> permissions table into an immutable lookup map.

    Keys and values are normalized to plain strings so enum members and
    raw strings resolve the same way.

    Args:
        role_permissions: Role to permission iterable (enums or strings).

    Returns:
        Read-only mapping of role code to frozenset of permission codes.
    """
    frozen: dict[str, frozenset[str]] = {}
    for role, permissions in role_permissions.items():
        role_code = _code(role)
        if role_code is None:
            raise ValueError(f"Invalid role in permission map: {role!r}")
        codes = {_code(p) for p in permissions}
        if None in codes:
            raise ValueError(f"Invalid permission for role {role_code!r}")
        frozen[role_code] = frozenset(c for c in codes if c is not None)
    return MappingProxyType(frozen)


DEFAULT_ROLE_PERMISSION_MAP: RolePermissionMap = build_role_permission_map()


def _custom_codes(custom_permissions: Any) -> frozenset[str] | None:
    """Normalize a custom permission list; None means "use role defaults"."""
    if custom_permissions is None:
        return None
    if isinstance(custom_permissions, (str, bytes, Mapping)) or not isinstance(
        custom_permissions, Iterable
    ):
        # Not a list: grants nothing rather than falling back to the role.
        return frozenset()
    codes = (_code(p) for p in custom_permissions)
    return frozenset(c for c in codes if c is not None)


def _requested(permissions: Any) -> list[Any] | None:
    """Requested permissions as a list, or None when not a list.

    None itself counts as an empty request.
    """
    if permissions is None:
        return []
    if isinstance(permissions, (str, bytes, Mapping)) or not isinstance(
        permissions, Iterable
    ):
        return None
    return list(permissions)


def permissions_for(
    role: Any,
    custom_permissions: Iterable[Any] | None = None,
    role_permissions: RolePermissionMap = DEFAULT_ROLE_PERMISSION_MAP,
) -> frozenset[str]:
    """Return the effective permission codes for a role (or custom list)."""
    custom = _custom_codes(custom_permissions)
    if custom is not None:
        return custom
    role_code = _code(role)
    if role_code is None:
        return frozenset()
    return role_permissions.get(role_code, frozenset())


def has_permission(
    role: Any,
    permission: Any,
    custom_permissions: Iterable[Any] | None = None,
    role_permissions: RolePermissionMap = DEFAULT_ROLE_PERMISSION_MAP,
) -> bool:
    """Return True if the role (or custom list) grants the permission."""
    code = _code(permission)
    if code is None:
        return False
    return code in permissions_for(role, custom_permissions, role_permissions)


def has_any_permission(
    role: Any,
    permissions: Iterable[Any],
    custom_permissions: Iterable[Any] | None = None,
    role_permissions: RolePermissionMap = DEFAULT_ROLE_PERMISSION_MAP,
) -> bool:
    """Return True if at least one permission is granted; False for an empty list."""
    granted = permissions_for(role, custom_permissions, role_permissions)
    requested = _requested(permissions)
    if requested is None:
        return False
    return any(_code(p) in granted for p in requested)


def has_all_permissions(
    role: Any,
    permissions: Iterable[Any],
    custom_permissions: Iterable[Any] | None = None,
    role_permissions: RolePermissionMap = DEFAULT_ROLE_PERMISSION_MAP,
) -> bool:
    """Return True if every permission is granted; True for an empty list."""
    granted = permissions_for(role, custom_permissions, role_permissions)
    requested = _requested(permissions)
    if requested is None:
        return False
    return all(_code(p) in granted for p in requested)
