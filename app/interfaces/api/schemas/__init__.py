from .auth import Token
from .notification import NotificationMarkReadResponse, NotificationRead

__all__ = [
    "NotificationMarkReadResponse",
    "NotificationRead",
    "Token",
]
