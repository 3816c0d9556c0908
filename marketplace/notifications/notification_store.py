"""
NOTIFICATION STORE

Purpose:
- Hold the signed-in user's notifications as fetched from the backend
- Read/unread status tracking
- Unread count for the notification bell

Requirements:
• Notifications change only through explicit mark-read actions
• Local read flags flip only after the backend acknowledges
• Failures are non-critical: logged, never raised to the page
"""

import logging
from typing import Any, Dict, List, Optional

from marketplace.integrations.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class Notification:
    """Notification record."""

    def __init__(
        self,
        notification_id: str,
        message: str,
        read: bool,
        notification_type: str,
        created_at: Optional[str] = None,
    ):
        """
        Initialize notification.

        Args:
            notification_id: Backend ID
            message: Text shown to the user
            read: Whether the user has read it
            notification_type: Category tag from the backend
            created_at: ISO timestamp
        """
        self.notification_id = notification_id
        self.message = message
        self.read = read
        self.notification_type = notification_type
        self.created_at = created_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's JSON shape."""
        return {
            "_id": self.notification_id,
            "message": self.message,
            "read": self.read,
            "type": self.notification_type,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        """Create notification from a backend payload."""
        return cls(
            notification_id=str(data["_id"]),
            message=data.get("message", ""),
            read=bool(data.get("read", False)),
            notification_type=data.get("type", "info"),
            created_at=data.get("createdAt"),
        )


class NotificationCenter:
    """Notifications for the current user, refreshed by explicit fetches."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.notifications: List[Notification] = []

    def refresh(self) -> bool:
        """
        Reload notifications.

        Returns:
            bool: True if loaded, False if the backend call failed
        """
        try:
            data = self.api.get("/api/notifications") or []
        except ApiError as e:
            logger.warning(f"Could not load notifications: {e.message}")
            return False

        notifications = []
        for entry in data:
            try:
                notifications.append(Notification.from_dict(entry))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unreadable notification: {e!r}")
        self.notifications = notifications
        return True

    @property
    def unread_count(self) -> int:
        return len([n for n in self.notifications if not n.read])

    def mark_read(self, notification_id: str) -> bool:
        """
        Mark one notification read.

        Returns:
            bool: True if acknowledged, False otherwise
        """
        try:
            self.api.patch(f"/api/notifications/{notification_id}/read")
        except ApiError as e:
            logger.warning(f"Mark read failed for {notification_id}: {e.message}")
            return False

        for notification in self.notifications:
            if notification.notification_id == notification_id:
                notification.read = True
        return True

    def mark_all_read(self) -> bool:
        try:
            self.api.patch("/api/notifications/read-all")
        except ApiError as e:
            logger.warning(f"Mark all read failed: {e.message}")
            return False

        for notification in self.notifications:
            notification.read = True
        return True
