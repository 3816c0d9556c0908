"""
Guard fallbacks - inline pages shown instead of gated content
"""
import streamlit as st

from security.access_guard import DEALS, LOGIN, LOGIN_REQUIRED
from ui.session import navigate


def render_fallback(reason):
    """Render exactly one fallback for a denial reason."""
    if reason == LOGIN_REQUIRED:
        render_login_required()
    else:
        render_access_denied()


def render_login_required():
    st.markdown("## 🔒 Login required")
    st.write("Please log in to continue.")
    if st.button("Go to login", key="guard_login_btn", type="primary"):
        navigate(LOGIN)


def render_access_denied():
    st.markdown("## ⛔ Access denied")
    st.write("You do not have permission for this page.")
    if st.button("Back to Deals", key="guard_back_btn"):
        navigate(DEALS)
