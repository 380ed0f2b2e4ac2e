"""Domain exceptions for the MyNet application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class MyNetException(Exception):
    """Base exception for all MyNet application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MyNetException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(MyNetException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(MyNetException):
    """Raised when the caller lacks required permissions or role."""

    def __init__(
        self,
        permissions: list[str] | None = None,
        roles: list[str] | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the permissions or roles that were required.

        Args:
            permissions: Permission codes the operation needed.
            roles: Roles the operation was restricted to.
            message: Human-readable message.
        """
        details: dict[str, Any] = {}
        if permissions:
            details["required_permissions"] = permissions
        if roles:
            details["required_roles"] = roles
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(MyNetException):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class CacheConfigurationException(MyNetException):
    """Raised at startup when the route cache table is malformed."""

    def __init__(self, message: str, route: str | None = None) -> None:
        details = {"route": route} if route else {}
        super().__init__(message, "CACHE_CONFIGURATION_ERROR", details)
