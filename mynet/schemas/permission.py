"""Permission API schemas: role maps and permission checks."""

from typing import Literal

from pydantic import BaseModel, Field


class RolePermissionsResponse(BaseModel):
    """Default permissions of one role."""

    role: str
    permissions: list[str] = Field(default_factory=list)


class EffectivePermissionsResponse(BaseModel):
    """Permissions held by the authenticated caller."""

    user_id: str
    role: str
    custom: bool = Field(
        ..., description="True when a per-user grant list replaces the role defaults"
    )
    permissions: list[str] = Field(default_factory=list)


class PermissionCheckRequest(BaseModel):
    """Evaluate permissions for a role, optionally with a custom grant list."""

    role: str = Field(..., min_length=1)
    permissions: list[str] = Field(default_factory=list)
    custom_permissions: list[str] | None = None
    mode: Literal["any", "all"] = "all"


class PermissionCheckResponse(BaseModel):
    """Overall decision plus the per-permission breakdown."""

    granted: bool
    mode: Literal["any", "all"]
    results: dict[str, bool] = Field(default_factory=dict)
