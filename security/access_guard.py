"""
ROUTE GUARDS (FINAL GATING DECISION)

This is the SINGLE ENTRYPOINT for client-side route gating.

Inputs:
- route: str
- is_authenticated: bool
- role: Optional[str]

Rules:
- AuthGate is evaluated before RoleGate
- Anonymous visitors only ever see the login-required outcome
- Synchronous, no network, no side effects
- Denials are values, never exceptions

Return:
- (allowed, denial_reason)
"""

from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from security.roles import ADMIN, OWNER

# Denial reason codes
LOGIN_REQUIRED = "LOGIN_REQUIRED"
ACCESS_DENIED = "ACCESS_DENIED"

# Route names
HOME = "home"
DEALS = "deals"
DEAL_DETAILS = "deal_details"
EXPLORE = "explore"
CART = "cart"
CHECKOUT = "checkout"
ORDERS = "orders"
FAVORITES = "favorites"
PORTAL = "portal"
ADMIN_PANEL = "admin"
LOGIN = "login"
REGISTER = "register"

# Route → policy. Routes not listed here are open.
ROUTE_POLICIES: Dict[str, Dict[str, Any]] = {
    FAVORITES: {"auth": True, "roles": None},
    CHECKOUT: {"auth": True, "roles": None},
    ORDERS: {"auth": True, "roles": None},
    PORTAL: {"auth": True, "roles": frozenset({OWNER, ADMIN})},
    ADMIN_PANEL: {"auth": True, "roles": frozenset({ADMIN})},
}


def check_auth_gate(is_authenticated: bool) -> Tuple[bool, Optional[str]]:
    """AuthGate: pass when a usable credential is present."""
    if not is_authenticated:
        return (False, LOGIN_REQUIRED)
    return (True, None)


def check_role_gate(
    role: Optional[str],
    allowed: Iterable[str],
) -> Tuple[bool, Optional[str]]:
    """RoleGate: pass when the role is a member of the allow-set."""
    if role is None or role not in frozenset(allowed):
        return (False, ACCESS_DENIED)
    return (True, None)


def check_route_access(
    route: str,
    is_authenticated: bool,
    role: Optional[str],
) -> Tuple[bool, Optional[str]]:
    """
    Evaluate the nested gates configured for a route.

    Args:
        route: Route name (see constants above)
        is_authenticated: Credential present with a parseable role
        role: Role derived from the credential

    Returns:
        (True, None) if the route may render,
        (False, LOGIN_REQUIRED | ACCESS_DENIED) otherwise
    """
    policy = ROUTE_POLICIES.get(route)
    if policy is None:
        return (True, None)

    if policy["auth"]:
        allowed, reason = check_auth_gate(is_authenticated)
        if not allowed:
            return (allowed, reason)

    if policy["roles"] is not None:
        return check_role_gate(role, policy["roles"])

    return (True, None)


def render_guarded(
    route: str,
    is_authenticated: bool,
    role: Optional[str],
    render_content: Callable[[], Any],
    render_fallback: Callable[[str], Any],
) -> Any:
    """
    Render either the route content or exactly one fallback.

    The fallback receives the denial reason code so callers can show
    "login required" or "access denied" wording.
    """
    allowed, reason = check_route_access(route, is_authenticated, role)
    if not allowed:
        return render_fallback(reason)
    return render_content()
