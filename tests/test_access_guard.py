from security.access_guard import (
    ACCESS_DENIED,
    ADMIN_PANEL,
    CART,
    DEALS,
    HOME,
    FAVORITES,
    LOGIN_REQUIRED,
    PORTAL,
    check_auth_gate,
    check_role_gate,
    check_route_access,
    render_guarded,
)
from security.roles import ADMIN, CUSTOMER, OWNER


def test_auth_gate():
    assert check_auth_gate(True) == (True, None)
    assert check_auth_gate(False) == (False, LOGIN_REQUIRED)


def test_role_gate_admin_and_customer():
    assert check_role_gate(ADMIN, [ADMIN]) == (True, None)
    assert check_role_gate(CUSTOMER, [ADMIN]) == (False, ACCESS_DENIED)
    assert check_role_gate(None, [ADMIN]) == (False, ACCESS_DENIED)


def test_open_routes_need_nothing():
    assert check_route_access(HOME, False, None) == (True, None)
    assert check_route_access(DEALS, False, None) == (True, None)
    assert check_route_access(CART, False, None) == (True, None)


def test_route_policies():
    assert check_route_access(FAVORITES, True, CUSTOMER) == (True, None)
    assert check_route_access(PORTAL, True, OWNER) == (True, None)
    assert check_route_access(PORTAL, True, ADMIN) == (True, None)
    assert check_route_access(PORTAL, True, CUSTOMER) == (False, ACCESS_DENIED)
    assert check_route_access(ADMIN_PANEL, True, ADMIN) == (True, None)
    assert check_route_access(ADMIN_PANEL, True, OWNER) == (False, ACCESS_DENIED)


def test_auth_failure_wins_over_role_failure():
    # Even a role claim does not reach RoleGate without authentication
    assert check_route_access(ADMIN_PANEL, False, ADMIN) == (False, LOGIN_REQUIRED)
    assert check_route_access(PORTAL, False, None) == (False, LOGIN_REQUIRED)


def test_unauthenticated_portal_renders_only_the_fallback():
    rendered = []

    result = render_guarded(
        PORTAL,
        is_authenticated=False,
        role=None,
        render_content=lambda: rendered.append("portal") or "portal",
        render_fallback=lambda reason: rendered.append(reason) or reason,
    )

    assert result == LOGIN_REQUIRED
    assert rendered == [LOGIN_REQUIRED]


def test_authorized_route_renders_content_unchanged():
    result = render_guarded(
        ADMIN_PANEL, True, ADMIN,
        render_content=lambda: "admin content",
        render_fallback=lambda reason: reason,
    )
    assert result == "admin content"
