"""Public helpers for producing administrator notifications."""

from .delivery import deliver_to_admins
from .scan import ScanSummary, run_scan_pass

__all__ = [
    "ScanSummary",
    "deliver_to_admins",
    "run_scan_pass",
]
