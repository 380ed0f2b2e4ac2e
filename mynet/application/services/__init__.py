"""Application services: permission resolver and authorization."""

from mynet.application.services.authorization_service import AuthorizationService
from mynet.application.services.permission_resolver import PermissionResolver

__all__ = [
    "AuthorizationService",
    "PermissionResolver",
]
