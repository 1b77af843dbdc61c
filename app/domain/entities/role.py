"""Roles a user can hold."""

from enum import Enum


class UserRole(str, Enum):
    """Role assigned to a user account."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


__all__ = ["UserRole"]
