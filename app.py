"""
Restaurant Deals - Streamlit client
Minimal main file: page modules are imported only when their route renders
"""
import streamlit as st

from marketplace.config import configure_logging
from security.access_guard import (
    ADMIN_PANEL,
    CART,
    CHECKOUT,
    DEAL_DETAILS,
    DEALS,
    EXPLORE,
    FAVORITES,
    HOME,
    LOGIN,
    ORDERS,
    PORTAL,
    REGISTER,
    render_guarded,
)
from ui.guards import render_fallback
from ui.session import get_context, navigate

# ═══════════════════════════════════════════════════════════════
# PAGE CONFIG (MUST BE FIRST)
# ═══════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="Restaurant Deals",
    page_icon="🍽️",
    layout="wide",
)

configure_logging()
ctx = get_context()

# ═══════════════════════════════════════════════════════════════
# ROUTES (LAZY LOADED)
# ═══════════════════════════════════════════════════════════════
def _page(module_name, fn_name):
    def render():
        import importlib
        module = importlib.import_module(f"ui.{module_name}")
        getattr(module, fn_name)(ctx)
    return render


PAGES = {
    HOME: ("🏠 Home", _page("home", "render_home")),
    DEALS: ("🍽️ Deals", _page("deals", "render_deals")),
    DEAL_DETAILS: ("Deal details", _page("deals", "render_deal_details")),
    EXPLORE: ("🧭 Explore", _page("explore", "render_explore")),
    FAVORITES: ("⭐ Favorites", _page("favorites", "render_favorites")),
    CART: ("🛒 Cart", _page("cart", "render_cart")),
    CHECKOUT: ("💳 Checkout", _page("cart", "render_checkout")),
    ORDERS: ("🧾 Orders", _page("orders", "render_orders")),
    PORTAL: ("🧑‍🍳 Portal", _page("portal", "render_portal")),
    ADMIN_PANEL: ("🛡️ Admin", _page("admin", "render_admin")),
    LOGIN: ("🔑 Login", _page("login", "render_login")),
    REGISTER: ("📝 Register", _page("login", "render_register")),
}

NAV_ROUTES = [HOME, DEALS, EXPLORE, FAVORITES, CART, ORDERS, PORTAL, ADMIN_PANEL]

# ═══════════════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════════════
st.sidebar.title("🍽️ Restaurant Deals")

for route in NAV_ROUTES:
    label = PAGES[route][0]
    if route == CART and ctx.cart.count:
        label = f"{label} ({ctx.cart.count})"
    if st.sidebar.button(label, key=f"nav_{route}", use_container_width=True):
        navigate(route)

st.sidebar.divider()

if ctx.is_authenticated:
    st.sidebar.caption(f"Signed in as **{ctx.role}**")
    from ui.notifications import render_notifications_bell
    render_notifications_bell(ctx)

    if st.sidebar.button("Logout", key="nav_logout", use_container_width=True):
        ctx.sign_out()
        for key in ("owner_workspace", "admin_workspace", "notification_center"):
            st.session_state.pop(key, None)
        navigate(LOGIN)
else:
    col1, col2 = st.sidebar.columns(2)
    if col1.button("Login", key="nav_login", use_container_width=True):
        navigate(LOGIN)
    if col2.button("Register", key="nav_register", use_container_width=True):
        navigate(REGISTER)

# ═══════════════════════════════════════════════════════════════
# CURRENT ROUTE (GATED)
# ═══════════════════════════════════════════════════════════════
route = st.session_state.get("route", HOME)
if route not in PAGES:
    route = HOME

render_guarded(
    route,
    ctx.is_authenticated,
    ctx.role,
    render_content=PAGES[route][1],
    render_fallback=render_fallback,
)
