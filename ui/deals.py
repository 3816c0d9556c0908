"""
Deals Tab - public catalog and deal details
Only PUBLISHED deals are listed
"""
import streamlit as st

from marketplace.integrations.api_client import ApiError
from security.access_guard import DEAL_DETAILS, DEALS
from ui.session import navigate, set_flash, show_flash


def _add_to_cart(ctx, deal):
    ctx.cart.add_item(deal.deal_id, deal.title, deal.restaurant_name, deal.price)
    set_flash("deals", True, f"Added {deal.title} to your cart.")


def render_deals(ctx):
    """Render the published deals list"""
    st.markdown("## 🍽️ Deals")
    show_flash("deals")

    from marketplace.services.catalog_service import list_published_deals
    try:
        deals = list_published_deals(ctx.api)
    except ApiError as e:
        st.error(e.message)
        return

    if not deals:
        st.info("No deals published yet. Check back soon.")
        return

    type_filter = st.selectbox("Deal type", ["All", "Lunch", "Carryout", "Delivery", "Other"])
    if type_filter != "All":
        deals = [d for d in deals if d.deal_type == type_filter]

    for deal in deals:
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"**{deal.title}**")
                st.caption(f"{deal.restaurant_name} • {deal.deal_type or 'Other'} • {deal.discount.describe()}")
                if deal.description:
                    st.write(deal.description)
            with col2:
                if st.button("Details", key=f"details_{deal.deal_id}"):
                    navigate(DEAL_DETAILS, selected_deal_id=deal.deal_id)
                if deal.is_cart_eligible:
                    st.write(f"${deal.price:.2f}")
                    if st.button("Add to cart", key=f"add_{deal.deal_id}"):
                        _add_to_cart(ctx, deal)
                        st.rerun()


def render_deal_details(ctx):
    """Render one deal with cart and favorite actions"""
    deal_id = st.session_state.get("selected_deal_id")
    if not deal_id:
        st.info("Pick a deal from the list first.")
        return

    from marketplace.services.catalog_service import get_deal
    try:
        deal = get_deal(ctx.api, deal_id)
    except ApiError as e:
        st.error(e.message)
        return

    if st.button("← Back to Deals"):
        navigate(DEALS)

    st.markdown(f"## {deal.title}")
    st.caption(f"{deal.restaurant_name} • {deal.deal_type or 'Other'}")
    st.write(deal.description)
    st.write(f"**Offer:** {deal.discount.describe()}")

    col1, col2 = st.columns(2)
    with col1:
        if deal.is_cart_eligible:
            if st.button(f"Add to cart (${deal.price:.2f})", type="primary"):
                _add_to_cart(ctx, deal)
                navigate(DEALS)
    with col2:
        if ctx.is_authenticated and st.button("☆ Save to favorites"):
            from marketplace.services.favorites_service import FavoritesList
            try:
                FavoritesList(ctx.api).add(deal.deal_id)
                st.success("Saved to favorites.")
            except ApiError as e:
                st.error(e.message)
