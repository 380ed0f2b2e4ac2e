"""Tests for domain exceptions (error_code, message, details)."""

from mynet.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CacheConfigurationException,
    MyNetException,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base MyNetException uses class name as error_code when not provided."""
    exc = MyNetException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "MyNetException"
    assert exc.details == {}


def test_to_dict_is_the_error_body() -> None:
    exc = MyNetException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    exc = ValidationException("Invalid format", field="pattern")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "pattern"}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_lists_requirements() -> None:
    """Details carry only the requirement kinds that were given."""
    exc = AuthorizationException(permissions=["manage_users"])
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"required_permissions": ["manage_users"]}

    exc = AuthorizationException(roles=["super_admin"], message="Role not allowed")
    assert exc.message == "Role not allowed"
    assert exc.details == {"required_roles": ["super_admin"]}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("role", "auditor")
    assert exc.message == "role not found: auditor"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "role", "resource_id": "auditor"}


def test_cache_configuration_exception_carries_route() -> None:
    exc = CacheConfigurationException("bad pattern", route="/api/(")
    assert exc.error_code == "CACHE_CONFIGURATION_ERROR"
    assert exc.details == {"route": "/api/("}
