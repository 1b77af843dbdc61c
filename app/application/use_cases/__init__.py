"""Aggregate application use cases."""

from .notifications import ScanSummary, run_scan_pass
from .users import authenticate_user, ensure_default_admin

__all__ = [
    "ScanSummary",
    "authenticate_user",
    "ensure_default_admin",
    "run_scan_pass",
]
