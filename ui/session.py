"""
Session bootstrap - one AppContext per browser session
"""
import streamlit as st

from marketplace.core.app_context import AppContext
from security.access_guard import DEALS


def get_context() -> AppContext:
    """Build the context on first access; reuse it on every rerun."""
    if "app_context" not in st.session_state:
        st.session_state.app_context = AppContext()
        st.session_state.route = DEALS
        st.session_state.selected_deal_id = None
    return st.session_state.app_context


def navigate(route, **state):
    """Switch page on the next rerun."""
    st.session_state.route = route
    for key, value in state.items():
        st.session_state[key] = value
    st.rerun()


def show_flash(scope):
    """Render and consume the success/error message left for a page."""
    flash = st.session_state.pop(f"flash_{scope}", None)
    if not flash:
        return
    kind, message = flash
    if kind == "error":
        st.error(message)
    else:
        st.success(message)


def set_flash(scope, ok, message):
    st.session_state[f"flash_{scope}"] = ("success" if ok else "error", message)
