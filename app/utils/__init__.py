"""Utility helpers for reusable functionality."""

from .datetime import (
    add_months,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    today_in_app_timezone,
)

__all__ = [
    "add_months",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "today_in_app_timezone",
]
