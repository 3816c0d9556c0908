"""
Home Tab - hero links and top deals
"""
import streamlit as st

from security.access_guard import ADMIN_PANEL, DEAL_DETAILS, DEALS, PORTAL, REGISTER
from security.roles import ADMIN, OWNER
from ui.session import navigate


def render_home(ctx):
    """Render the landing page with up to three featured deals"""
    st.markdown("## Discover Local Restaurant Deals")
    st.write("Browse exclusive discounts from restaurants near you. "
             "Save your favorites and never miss a deal.")

    cols = st.columns(4)
    if cols[0].button("Browse Deals", type="primary", key="home_browse"):
        navigate(DEALS)
    if ctx.role is None:
        if cols[1].button("Create Account", key="home_register"):
            navigate(REGISTER)
    if ctx.role in (OWNER, ADMIN):
        if cols[2].button("Go to Portal", key="home_portal"):
            navigate(PORTAL)
    if ctx.role == ADMIN:
        if cols[3].button("Admin Queue", key="home_admin"):
            navigate(ADMIN_PANEL)

    st.markdown("### Top Deals")
    from marketplace.services.catalog_service import list_featured_deals
    featured = list_featured_deals(ctx.api)
    if not featured:
        st.info("No deals published yet. Check back soon!")
        return

    for col, deal in zip(st.columns(len(featured)), featured):
        with col.container(border=True):
            st.markdown(f"**{deal.title}**")
            st.caption(f"{deal.restaurant_name} • {deal.deal_type or 'Other'}")
            if deal.description:
                st.write(deal.description)
            st.markdown(f"**{deal.discount.describe()}**")
            if st.button("View", key=f"home_deal_{deal.deal_id}"):
                navigate(DEAL_DETAILS, selected_deal_id=deal.deal_id)

    if st.button("View all deals →", key="home_all"):
        navigate(DEALS)
