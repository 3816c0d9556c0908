"""
Portal Tab - owner deal management
Create drafts, edit, submit for review, delete drafts
"""
import streamlit as st

from marketplace.core.deal import DEAL_TYPES, DISCOUNT_TYPES
from marketplace.core.deal_workspace import DealWorkspace
from marketplace.core.lifecycle import DealStatus, Transition
from marketplace.integrations.api_client import ApiError
from ui.session import set_flash, show_flash

STATUS_BADGES = {
    DealStatus.DRAFT: "⚪",
    DealStatus.SUBMITTED: "🟠",
    DealStatus.PUBLISHED: "🟢",
    DealStatus.REJECTED: "🔴",
}


def _get_workspace(ctx):
    """One owner workspace per session, reloaded when the role changes."""
    ws = st.session_state.get("owner_workspace")
    if ws is None or ws.role != ctx.role or st.session_state.get("owner_workspace_stale", True):
        ws = DealWorkspace(ctx.api, ctx.role)
        try:
            ws.load_owner_deals()
        except ApiError as e:
            st.error(e.message or "Failed to load owner deals")
            return None
        st.session_state.owner_workspace = ws
        st.session_state.owner_workspace_stale = False
    return ws


def _render_create_form(ws):
    with st.form("create_deal_form", clear_on_submit=True):
        st.markdown("### ➕ Create Draft Deal")
        restaurant_name = st.text_input("Restaurant name")
        title = st.text_input("Deal title")
        description = st.text_area("Deal description")

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            deal_type = st.selectbox("Deal type", DEAL_TYPES)
        with col2:
            discount_type = st.selectbox("Discount type", DISCOUNT_TYPES)
        with col3:
            value = st.number_input("Value", min_value=1, value=20)
        with col4:
            price = st.number_input("Price ($, optional)", min_value=0.0, value=0.0, step=0.5)

        submitted = st.form_submit_button("Create Draft", type="primary")

    if submitted:
        if not (restaurant_name.strip() and title.strip() and description.strip()):
            st.error("Restaurant name, title and description are required.")
            return
        fields = {
            "restaurantName": restaurant_name.strip(),
            "title": title.strip(),
            "description": description.strip(),
            "dealType": deal_type,
            "discountType": discount_type,
            "value": value,
        }
        if price > 0:
            fields["price"] = price
        outcome = ws.create_draft(fields)
        set_flash("portal", outcome.ok, outcome.message)
        st.rerun()


def _render_edit_form(ws, deal):
    with st.form(f"edit_{deal.deal_id}"):
        title = st.text_input("Title", value=deal.title)
        description = st.text_area("Description", value=deal.description)
        col1, col2 = st.columns(2)
        save = col1.form_submit_button("Save", type="primary")
        cancel = col2.form_submit_button("Cancel")

    if cancel:
        st.session_state.editing_deal_id = None
        st.rerun()
    if save:
        if not title.strip() or not description.strip():
            st.error("Title and description are required.")
            return
        outcome = ws.edit_deal(deal.deal_id, {"title": title, "description": description})
        if outcome.ok:
            st.session_state.editing_deal_id = None
        set_flash("portal", outcome.ok, outcome.message)
        st.rerun()


def _render_deal(ws, deal):
    with st.container(border=True):
        if st.session_state.get("editing_deal_id") == deal.deal_id:
            _render_edit_form(ws, deal)
            return

        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"**{deal.title}**")
            st.caption(deal.restaurant_name)
        with col2:
            st.write(f"{STATUS_BADGES[deal.status]} {deal.status.value}")

        if deal.description:
            st.write(deal.description)
        if deal.created_at:
            st.caption(f"Created: {deal.created_at[:10]}")
        if deal.status == DealStatus.REJECTED and deal.rejection_reason:
            st.warning(f"Rejection reason: {deal.rejection_reason}")

        col1, col2, col3 = st.columns(3)
        if ws.can(deal, Transition.EDIT):
            if col1.button("Edit", key=f"edit_btn_{deal.deal_id}"):
                st.session_state.editing_deal_id = deal.deal_id
                st.rerun()
        if ws.can(deal, Transition.DELETE):
            if col2.button("Delete", key=f"delete_btn_{deal.deal_id}"):
                outcome = ws.delete_deal(deal.deal_id)
                set_flash("portal", outcome.ok, outcome.message)
                st.rerun()
        if ws.can(deal, Transition.SUBMIT):
            if col3.button("Submit for Review", key=f"submit_btn_{deal.deal_id}", type="primary"):
                outcome = ws.submit_deal(deal.deal_id)
                set_flash("portal", outcome.ok, outcome.message)
                st.rerun()


def render_portal(ctx):
    """Render owner portal"""
    st.markdown("## 🧑‍🍳 Owner Portal")

    ws = _get_workspace(ctx)
    if ws is None:
        return

    if st.button("🔄 Refresh"):
        st.session_state.owner_workspace_stale = True
        st.rerun()

    _render_create_form(ws)
    show_flash("portal")

    st.divider()
    status_filter = st.selectbox("Filter", ["ALL"] + [s.value for s in DealStatus])

    if not ws.deals:
        st.info("No deals yet. Create your first draft above.")
        return

    for deal in ws.filter_by_status(status_filter):
        _render_deal(ws, deal)
