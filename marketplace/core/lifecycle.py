# marketplace/core/lifecycle.py

from enum import Enum
from typing import Optional

from marketplace.core.role_guard import AuthorizationError, validate_role_authority


class LifecycleError(Exception):
    """Raised when an invalid deal transition is attempted."""
    pass


class DealStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    PUBLISHED = "PUBLISHED"
    REJECTED = "REJECTED"


class Transition(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    SUBMIT = "submit"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"


# Virtual state for a deal that does not exist yet
NONE = None

# Marker for transitions that keep the current status
UNCHANGED = "UNCHANGED"

# Single source of truth for deal transitions:
# transition -> (statuses it may start from, resulting status)
# A resulting status of None means the deal leaves the working set.
LIFECYCLE_TRANSITIONS = {
    Transition.CREATE: ({NONE}, DealStatus.DRAFT),
    Transition.EDIT: ({DealStatus.DRAFT, DealStatus.REJECTED}, UNCHANGED),
    Transition.SUBMIT: ({DealStatus.DRAFT, DealStatus.REJECTED}, DealStatus.SUBMITTED),
    Transition.DELETE: ({DealStatus.DRAFT}, None),
    Transition.APPROVE: ({DealStatus.SUBMITTED}, DealStatus.PUBLISHED),
    Transition.REJECT: ({DealStatus.SUBMITTED}, DealStatus.REJECTED),
}


def _coerce_status(status) -> Optional[DealStatus]:
    if status is None or isinstance(status, DealStatus):
        return status
    try:
        return DealStatus(status)
    except ValueError:
        raise LifecycleError(f"Unknown deal status: {status}")


def next_status(current_status, transition, role) -> Optional[DealStatus]:
    """
    Resolve a transition against the lifecycle table.

    Args:
        current_status: DealStatus (or its string value); None before create
        transition: Transition (or its string value)
        role: Role of the acting user

    Returns:
        The status after the transition, or None when the deal is deleted.

    Raises:
        AuthorizationError: role may not invoke this transition
        LifecycleError: transition not valid from current_status
    """
    try:
        transition = Transition(transition)
    except ValueError:
        raise LifecycleError(f"Unknown transition: {transition}")

    current = _coerce_status(current_status)

    validate_role_authority(role, transition.value)

    allowed_from, target = LIFECYCLE_TRANSITIONS[transition]
    if current not in allowed_from:
        label = current.value if current else "NONE"
        raise LifecycleError(f"Cannot {transition.value} a deal in status {label}")

    if target == UNCHANGED:
        return current
    return target


def can_transition(current_status, transition, role) -> bool:
    """Boolean form of next_status, for enabling controls."""
    try:
        next_status(current_status, transition, role)
    except (LifecycleError, AuthorizationError):
        return False
    return True
