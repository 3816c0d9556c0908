"""
Cart Tab - local cart and checkout
"""
import streamlit as st

from marketplace import config
from marketplace.integrations.api_client import ApiError
from security.access_guard import CHECKOUT, DEALS, ORDERS
from ui.session import navigate

TEST_PAYMENT_METHOD = "pm_card_visa"


def render_cart(ctx):
    """Render cart lines with quantity controls"""
    cart = ctx.cart
    st.markdown("## 🛒 Your Cart")

    if not cart.items:
        st.info("Your cart is empty.")
        if st.button("Browse deals"):
            navigate(DEALS)
        return

    for item in cart.items:
        with st.container(border=True):
            col1, col2, col3, col4 = st.columns([4, 1, 1, 1])
            with col1:
                st.markdown(f"**{item.title}**")
                st.caption(f"{item.restaurant_name} • ${item.price:.2f} each")
            with col2:
                if st.button("−", key=f"dec_{item.deal_id}"):
                    cart.decrement_item(item.deal_id)
                    st.rerun()
            with col3:
                st.write(f"× {item.qty}")
                if st.button("+", key=f"inc_{item.deal_id}"):
                    cart.add_item(item.deal_id, item.title, item.restaurant_name, item.price)
                    st.rerun()
            with col4:
                st.write(f"${item.line_total:.2f}")
                if st.button("Remove", key=f"rm_{item.deal_id}"):
                    cart.remove_item(item.deal_id)
                    st.rerun()

    st.divider()
    col1, col2 = st.columns(2)
    col1.metric("Items", cart.count)
    col2.metric("Total", f"${cart.total:.2f}")

    if st.button("Proceed to checkout", type="primary"):
        navigate(CHECKOUT)


def render_checkout(ctx):
    """Render order summary, payment method and pay button"""
    cart = ctx.cart
    st.markdown("## 💳 Checkout")

    if not cart.items:
        st.info("Your cart is empty.")
        return

    for item in cart.items:
        st.write(f"{item.title} × {item.qty} - ${item.line_total:.2f}")
    st.markdown(f"**Total: ${cart.total:.2f}**")

    if not config.STRIPE_PUBLISHABLE_KEY:
        st.warning("Card payments are not configured (set STRIPE_PUBLISHABLE_KEY).")
        return

    test_mode = config.STRIPE_PUBLISHABLE_KEY.startswith("pk_test_")
    payment_method = st.text_input(
        "Payment method",
        value=TEST_PAYMENT_METHOD if test_mode else "",
        help="Payment method id issued by the processor (pm_...)",
    )
    if test_mode:
        st.caption("Test mode: no real card is charged.")

    pending = st.session_state.get("checkout_pending", False)
    if st.button(f"Pay ${cart.total:.2f}", type="primary", disabled=pending):
        from marketplace.integrations.payments import confirm_card_payment
        from marketplace.services.order_service import place_order
        st.session_state.checkout_pending = True
        try:
            with st.spinner("Processing..."):
                place_order(
                    ctx.api,
                    cart,
                    confirm_payment=lambda secret: confirm_card_payment(secret, payment_method.strip()),
                )
        except ApiError as e:
            st.error(e.message or "Checkout failed")
            return
        finally:
            st.session_state.checkout_pending = False
        navigate(ORDERS)
