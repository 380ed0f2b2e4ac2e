"""Permission resolution: role defaults, custom override, any/all semantics."""

import pytest

from mynet.application.services.permission_resolver import PermissionResolver
from mynet.domain.enums import Permission, Role
from mynet.domain.permissions import (
    ROLE_PERMISSIONS,
    build_role_permission_map,
    has_all_permissions,
    has_any_permission,
    has_permission,
    permissions_for,
)


class TestRoleDefaults:
    """Every non-super-admin role grants exactly its configured list."""

    @pytest.mark.parametrize(
        "role", [r for r in Role if r is not Role.SUPER_ADMIN]
    )
    def test_role_grants_exactly_its_list(self, role: Role) -> None:
        configured = set(ROLE_PERMISSIONS[role])
        for permission in Permission:
            assert has_permission(role, permission) is (permission in configured)

    def test_super_admin_has_full_universe(self) -> None:
        assert permissions_for(Role.SUPER_ADMIN) == frozenset(Permission.values())

    def test_admin_defaults_are_empty(self) -> None:
        assert permissions_for(Role.ADMIN) == frozenset()
        assert not has_permission(Role.ADMIN, Permission.VIEW_DASHBOARD)

    def test_strings_and_enums_resolve_the_same(self) -> None:
        assert has_permission("buyer", "create_tender")
        assert has_permission(Role.BUYER, Permission.CREATE_TENDER)
        assert not has_permission("supplier", Permission.CREATE_TENDER)


class TestDenyByDefault:
    def test_unknown_role_denies(self) -> None:
        assert not has_permission("auditor", Permission.VIEW_DASHBOARD)

    def test_unknown_permission_denies(self) -> None:
        assert not has_permission(Role.SUPER_ADMIN, "launch_rockets")

    @pytest.mark.parametrize("role", [None, 42, ["buyer"], {"role": "buyer"}])
    def test_malformed_role_never_raises(self, role: object) -> None:
        assert has_permission(role, Permission.VIEW_TENDER) is False

    @pytest.mark.parametrize("permission", [None, 7, ["view_tender"]])
    def test_malformed_permission_never_raises(self, permission: object) -> None:
        assert has_permission(Role.BUYER, permission) is False


class TestCustomPermissionsOverride:
    """A custom list replaces the role defaults entirely (no union)."""

    @pytest.mark.parametrize("role", list(Role) + ["unknown"])
    @pytest.mark.parametrize("permission", list(Permission))
    def test_equals_membership_in_custom_list(self, role, permission) -> None:
        custom = ["view_dashboard", "manage_users"]
        assert has_permission(role, permission, custom) is (permission.value in custom)

    def test_super_admin_with_custom_list_loses_defaults(self) -> None:
        assert not has_permission(
            Role.SUPER_ADMIN, Permission.MANAGE_SECURITY, ["view_dashboard"]
        )

    def test_empty_custom_list_denies_everything(self) -> None:
        assert permissions_for(Role.BUYER, []) == frozenset()
        assert not has_permission(Role.BUYER, Permission.VIEW_DASHBOARD, [])

    def test_none_custom_list_uses_role_defaults(self) -> None:
        assert has_permission(Role.BUYER, Permission.CREATE_TENDER, None)

    def test_non_list_custom_value_grants_nothing(self) -> None:
        assert not has_permission(Role.BUYER, Permission.VIEW_DASHBOARD, "view_dashboard")


class TestAnyAll:
    def test_all_requires_every_permission(self) -> None:
        perms = [Permission.VIEW_TENDER, Permission.SUBMIT_OFFER]
        assert has_all_permissions(Role.SUPPLIER, perms)
        assert not has_all_permissions(Role.BUYER, perms)

    def test_any_requires_one_permission(self) -> None:
        perms = [Permission.SUBMIT_OFFER, Permission.MANAGE_BACKUP]
        assert has_any_permission(Role.SUPPLIER, perms)
        assert not has_any_permission(Role.VIEWER, perms)

    def test_empty_list_semantics(self) -> None:
        assert has_all_permissions(Role.VIEWER, []) is True
        assert has_any_permission(Role.VIEWER, []) is False

    def test_custom_list_applies_to_any_and_all(self) -> None:
        custom = ["export_data"]
        assert has_any_permission(Role.SUPER_ADMIN, ["export_data", "manage_users"], custom)
        assert not has_all_permissions(Role.SUPER_ADMIN, ["export_data", "manage_users"], custom)


class TestPermissionResolver:
    def test_default_map_matches_module_functions(self) -> None:
        resolver = PermissionResolver()
        assert resolver.has_permission(Role.BUYER, Permission.APPROVE_OFFER)
        assert resolver.roles() == Role.values()

    def test_explicit_map_is_used(self) -> None:
        resolver = PermissionResolver({"auditor": ["view_audit_logs"]})
        assert resolver.has_permission("auditor", Permission.VIEW_AUDIT_LOGS)
        assert not resolver.has_permission(Role.BUYER, Permission.VIEW_TENDER)

    def test_map_is_immutable(self) -> None:
        resolver = PermissionResolver()
        with pytest.raises(TypeError):
            resolver.role_permissions["buyer"] = frozenset()  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak(self) -> None:
        source = {"auditor": ["view_audit_logs"]}
        resolver = PermissionResolver(source)
        source["auditor"].append("manage_users")
        assert not resolver.has_permission("auditor", "manage_users")

    def test_build_rejects_non_string_entries(self) -> None:
        with pytest.raises(ValueError):
            build_role_permission_map({"auditor": [None]})


class TestRequestedPermissionsInput:
    """Malformed permission requests never raise."""

    def test_none_counts_as_empty(self) -> None:
        assert has_any_permission(Role.BUYER, None) is False
        assert has_all_permissions(Role.BUYER, None) is True

    @pytest.mark.parametrize("permissions", ["view_tender", b"view_tender", {"view_tender": 1}, 42])
    def test_non_list_denies(self, permissions: object) -> None:
        assert has_any_permission(Role.SUPER_ADMIN, permissions) is False
        assert has_all_permissions(Role.SUPER_ADMIN, permissions) is False

    def test_resolver_handles_none(self) -> None:
        resolver = PermissionResolver()
        assert resolver.has_any_permission(Role.BUYER, None) is False
