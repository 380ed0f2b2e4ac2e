"""AuthorizationService: Principal checks raise AuthorizationException on denial."""

import pytest

from mynet.application.dtos.principal import Principal
from mynet.application.services.authorization_service import AuthorizationService
from mynet.application.services.permission_resolver import PermissionResolver
from mynet.domain.enums import Permission, Role
from mynet.domain.exceptions import AuthorizationException


@pytest.fixture
def auth_svc() -> AuthorizationService:
    return AuthorizationService(PermissionResolver())


def test_require_permission_passes_for_granted(auth_svc: AuthorizationService) -> None:
    principal = Principal(user_id="u1", role=Role.BUYER.value)
    auth_svc.require_permission(principal, Permission.CREATE_TENDER)


def test_require_permission_raises_with_details(auth_svc: AuthorizationService) -> None:
    principal = Principal(user_id="u1", role=Role.SUPPLIER.value)
    with pytest.raises(AuthorizationException) as exc_info:
        auth_svc.require_permission(principal, Permission.CREATE_TENDER)
    assert exc_info.value.error_code == "PERMISSION_DENIED"
    assert exc_info.value.details["required_permissions"] == ["create_tender"]


def test_admin_custom_grants_are_authoritative(auth_svc: AuthorizationService) -> None:
    principal = Principal(
        user_id="a1", role=Role.ADMIN.value, custom_permissions=("view_users",)
    )
    auth_svc.require_permission(principal, Permission.VIEW_USERS)
    with pytest.raises(AuthorizationException):
        auth_svc.require_permission(principal, Permission.MANAGE_USERS)
    assert auth_svc.effective_permissions(principal) == frozenset({"view_users"})


def test_require_any_permission(auth_svc: AuthorizationService) -> None:
    principal = Principal(user_id="u1", role=Role.VIEWER.value)
    auth_svc.require_any_permission(
        principal, [Permission.MANAGE_USERS, Permission.VIEW_REPORTS]
    )
    with pytest.raises(AuthorizationException):
        auth_svc.require_any_permission(principal, [Permission.MANAGE_USERS])


def test_require_role(auth_svc: AuthorizationService) -> None:
    principal = Principal(user_id="u1", role=Role.ACCOUNTANT.value)
    auth_svc.require_role(principal, [Role.ACCOUNTANT, Role.SUPER_ADMIN])
    with pytest.raises(AuthorizationException) as exc_info:
        auth_svc.require_role(principal, [Role.SUPER_ADMIN])
    assert exc_info.value.details["required_roles"] == ["super_admin"]


def test_check_permission_returns_bool(auth_svc: AuthorizationService) -> None:
    principal = Principal(user_id="u1", role="unknown-role")
    assert auth_svc.check_permission(principal, Permission.VIEW_TENDER) is False
    assert auth_svc.effective_permissions(principal) == frozenset()
