"""
Notification bell - sidebar dropdown
"""
import streamlit as st

from marketplace.notifications.notification_store import NotificationCenter


def render_notifications_bell(ctx):
    """Render the sidebar bell for signed-in users"""
    center = st.session_state.get("notification_center")
    if center is None:
        center = NotificationCenter(ctx.api)
        center.refresh()
        st.session_state.notification_center = center

    unread = center.unread_count
    label = f"🔔 Notifications ({unread})" if unread else "🔔 Notifications"

    with st.sidebar.expander(label):
        if st.button("Refresh", key="notif_refresh"):
            center.refresh()
            st.rerun()

        if not center.notifications:
            st.caption("No notifications yet.")
            return

        if unread and st.button("Mark all read", key="notif_read_all"):
            center.mark_all_read()
            st.rerun()

        for n in center.notifications:
            st.write(("" if n.read else "🆕 ") + n.message)
            st.caption((n.created_at or "")[:10])
            if not n.read and st.button("Mark read", key=f"notif_read_{n.notification_id}"):
                center.mark_read(n.notification_id)
                st.rerun()
