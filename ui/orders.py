"""
Orders Tab - order history
"""
import streamlit as st

from marketplace.integrations.api_client import ApiError

STATUS_BADGES = {
    "Placed": "🔵",
    "Preparing": "🟠",
    "Ready": "🟢",
    "Completed": "⚪",
}


def render_orders(ctx):
    """Render past orders, newest first"""
    import pandas as pd
    from marketplace.services.order_service import list_orders

    st.markdown("## 🧾 Your Orders")

    try:
        orders = list_orders(ctx.api)
    except ApiError as e:
        st.error(e.message or "Failed to load orders")
        return

    if not orders:
        st.info("No orders yet.")
        return

    for order in orders:
        badge = STATUS_BADGES.get(order.status, "⚪")
        with st.expander(f"{badge} {order.status} • ${order.total:.2f} • {(order.created_at or '')[:10]}"):
            df = pd.DataFrame([
                {
                    "Deal": line.title,
                    "Restaurant": line.restaurant_name,
                    "Qty": line.qty,
                    "Price": float(line.price),
                }
                for line in order.items
            ])
            st.dataframe(df, use_container_width=True, hide_index=True)
