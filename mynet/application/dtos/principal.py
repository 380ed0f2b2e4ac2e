"""DTO for the authenticated caller (decoded from the access token)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: id, role and optional per-user permission grants.

    custom_permissions is None when the token carries no grant list; an
    empty tuple means "grants nothing" and overrides the role defaults.
    """

    user_id: str
    role: str
    custom_permissions: tuple[str, ...] | None = None
