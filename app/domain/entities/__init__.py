"""Domain entities exposed by the application."""

from .notification import Notification, NotificationIntent, NotificationType
from .role import UserRole
from .user import User

__all__ = [
    "Notification",
    "NotificationIntent",
    "NotificationType",
    "User",
    "UserRole",
]
