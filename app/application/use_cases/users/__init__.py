"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .ensure_default_admin import ensure_default_admin

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "ensure_default_admin",
]
