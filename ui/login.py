"""
Login / Register Tabs
"""
import streamlit as st

from marketplace.integrations.api_client import ApiError
from security.access_guard import DEALS, PORTAL
from security.roles import OWNER, SELF_SERVICE_ROLES
from ui.session import navigate


def _after_sign_in(role):
    # Owners land on their portal, everyone else on the catalog.
    st.session_state.owner_workspace_stale = True
    st.session_state.admin_workspace_stale = True
    navigate(PORTAL if role == OWNER else DEALS)


def render_login(ctx):
    from marketplace.services.auth_service import login

    st.markdown("## 🔑 Login")

    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        try:
            with st.spinner("Logging in..."):
                role = login(ctx.api, ctx.credentials, email, password)
        except ApiError as e:
            st.error(e.message or "Login failed")
            return
        _after_sign_in(role)


def render_register(ctx):
    from marketplace.services.auth_service import register

    st.markdown("## 📝 Create an account")

    role = st.radio("I am a", SELF_SERVICE_ROLES, horizontal=True,
                    format_func=lambda r: "Restaurant owner" if r == OWNER else "Customer")

    with st.form("register_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        restaurant_id = st.text_input("Restaurant ID") if role == OWNER else ""
        submitted = st.form_submit_button("Register", type="primary")

    if submitted:
        try:
            new_role = register(ctx.api, ctx.credentials, email, password, confirm,
                                role, restaurant_id)
        except ApiError as e:
            st.error(e.message or "Registration failed")
            return
        _after_sign_in(new_role)
