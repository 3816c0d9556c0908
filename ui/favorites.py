"""
Favorites Tab - saved deals
"""
import streamlit as st

from marketplace.integrations.api_client import ApiError
from marketplace.services.favorites_service import FavoritesList
from security.access_guard import DEAL_DETAILS
from ui.session import navigate


def render_favorites(ctx):
    st.markdown("## ⭐ Favorites")

    favorites = FavoritesList(ctx.api)
    try:
        favorites.refresh()
    except ApiError as e:
        st.error(e.message or "Failed to load favorites")
        return

    if not favorites.items:
        st.info("No favorites yet. Save deals from their details page.")
        return

    for fav in favorites.items:
        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**{fav.title}**")
                st.caption(fav.restaurant_name)
                if fav.description:
                    st.write(fav.description)
            with col2:
                if st.button("View", key=f"fav_view_{fav.favorite_id}"):
                    navigate(DEAL_DETAILS, selected_deal_id=fav.deal_id)
                if st.button("Remove", key=f"fav_rm_{fav.favorite_id}"):
                    try:
                        favorites.remove(fav.deal_id)
                    except ApiError as e:
                        st.error(e.message or "Failed to remove favorite")
                    else:
                        st.rerun()
