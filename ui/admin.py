"""
Admin Tab - review queue
Approve or reject submitted deals; analytics only when requested
"""
import streamlit as st

from marketplace.core.deal_workspace import DealWorkspace
from marketplace.core.lifecycle import Transition
from marketplace.integrations.api_client import ApiError
from ui.session import set_flash, show_flash


def _get_queue(ctx):
    ws = st.session_state.get("admin_workspace")
    if ws is None or ws.role != ctx.role or st.session_state.get("admin_workspace_stale", True):
        ws = DealWorkspace(ctx.api, ctx.role)
        try:
            ws.load_submitted_queue()
        except ApiError as e:
            st.error(e.message or "Failed to load admin queue")
            return None
        st.session_state.admin_workspace = ws
        st.session_state.admin_workspace_stale = False
    return ws


def _render_reject_form(ws, deal):
    with st.form(f"reject_{deal.deal_id}"):
        reason = st.text_area("Reason for rejection")
        col1, col2 = st.columns(2)
        confirm = col1.form_submit_button("Confirm Reject", type="primary")
        cancel = col2.form_submit_button("Cancel")

    if cancel:
        st.session_state.rejecting_deal_id = None
        st.rerun()
    if confirm:
        if not reason.strip():
            st.error("A rejection reason is required.")
            return
        outcome = ws.reject_deal(deal.deal_id, reason)
        if outcome.ok:
            st.session_state.rejecting_deal_id = None
        set_flash("admin", outcome.ok, outcome.message)
        st.rerun()


def render_admin(ctx):
    """Render admin review queue"""
    st.markdown("## 🛡️ Admin Panel")

    ws = _get_queue(ctx)
    if ws is None:
        return

    if st.button("🔄 Refresh Queue"):
        st.session_state.admin_workspace_stale = True
        st.rerun()

    show_flash("admin")

    queue = ws.submitted_queue()
    st.caption(f"{len(queue)} deal{'s' if len(queue) != 1 else ''} awaiting review")

    if not queue:
        st.info("No deals pending review. All caught up.")

    for deal in queue:
        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**{deal.title}**")
                st.caption(deal.restaurant_name)
            with col2:
                if deal.deal_type:
                    st.write(deal.deal_type)
            if deal.description:
                st.write(deal.description)
            if deal.created_at:
                st.caption(f"Submitted: {deal.created_at[:10]}")

            if st.session_state.get("rejecting_deal_id") == deal.deal_id:
                _render_reject_form(ws, deal)
                continue

            col1, col2 = st.columns(2)
            if col1.button("Approve", key=f"approve_{deal.deal_id}", type="primary",
                           disabled=not ws.can(deal, Transition.APPROVE)):
                outcome = ws.approve_deal(deal.deal_id)
                set_flash("admin", outcome.ok, outcome.message)
                st.rerun()
            if col2.button("Reject", key=f"reject_{deal.deal_id}",
                           disabled=not ws.can(deal, Transition.REJECT)):
                st.session_state.rejecting_deal_id = deal.deal_id
                st.rerun()

    st.divider()
    if st.button("📊 Load Review Analytics"):
        render_analytics(ws)


def render_analytics(ws):
    """Deals reviewed this session by status - ONLY when explicitly requested"""
    import pandas as pd
    import plotly.express as px

    st.markdown("### 📈 Review Analytics")

    counts = ws.status_counts()
    df = pd.DataFrame({"status": list(counts.keys()), "deals": list(counts.values())})

    fig = px.bar(df, x="status", y="deals", title="Deals by Status")
    st.plotly_chart(fig, use_container_width=True)
    st.dataframe(df, use_container_width=True, hide_index=True)
