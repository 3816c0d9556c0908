# marketplace/core/role_guard.py

from security.roles import ADMIN, OWNER


class AuthorizationError(Exception):
    """Raised when a role attempts a deal transition it does not own."""
    pass


# ==================================================
# TRANSITION → ROLES ALLOWED TO INVOKE IT
# ==================================================
TRANSITION_ROLE_AUTHORITY = {
    # Owner side
    "create": {OWNER},
    "edit": {OWNER},
    "submit": {OWNER},
    "delete": {OWNER},

    # Review side
    "approve": {ADMIN},
    "reject": {ADMIN},
}


def validate_role_authority(role, transition: str) -> None:
    """
    Validate whether a role is authorized to invoke a transition.

    Raises AuthorizationError if not.
    """
    allowed_roles = TRANSITION_ROLE_AUTHORITY.get(transition, set())

    if role not in allowed_roles:
        raise AuthorizationError(
            f"Role '{role or 'anonymous'}' is not allowed to {transition} deals"
        )
