"""Print a signed access token for local testing of protected endpoints.

Usage:
    python -m scripts.issue_dev_token <role> [user_id] [permission ...]
When permissions are given they replace the role defaults for that token.
All imports use mynet.*.
"""

import sys

from mynet.core.config import get_settings
from mynet.domain.enums import Role
from mynet.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Issue token for role; optional user id and custom permissions."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.issue_dev_token <role> [user_id] [permission ...]",
            file=sys.stderr,
        )
        sys.exit(1)
    role = sys.argv[1]
    user_id = sys.argv[2] if len(sys.argv) > 2 else "dev-user"
    permissions = sys.argv[3:]

    if role not in Role.values():
        print(f"Unknown role: {role} (expected one of {', '.join(Role.values())})", file=sys.stderr)
        sys.exit(1)

    get_settings()
    claims: dict = {"sub": user_id, "role": role}
    if permissions:
        claims["permissions"] = permissions
    print(create_access_token(claims))


if __name__ == "__main__":
    main()
