"""
Explore Tab - nearby restaurants from the external places lookup
"""
import streamlit as st

from marketplace.integrations.api_client import ApiError


def render_explore(ctx):
    from marketplace.services.catalog_service import search_places

    st.markdown("## 🧭 Explore Restaurants")

    with st.form("explore_form"):
        col1, col2 = st.columns(2)
        query = col1.text_input("What", placeholder="pizza")
        near = col2.text_input("Near", placeholder="Austin, TX")
        submitted = st.form_submit_button("Search", type="primary")

    if not submitted:
        return
    if not query.strip():
        st.error("Enter something to search for.")
        return

    try:
        places = search_places(ctx.api, query, near)
    except ApiError as e:
        st.error(e.message or "Search failed")
        return

    if not places:
        st.info("No places found.")
        return

    for place in places:
        with st.container(border=True):
            st.markdown(f"**{place.get('name', 'Unknown')}**")
            if place.get("address"):
                st.caption(place["address"])
            if place.get("rating") is not None:
                st.write(f"⭐ {place['rating']}")
