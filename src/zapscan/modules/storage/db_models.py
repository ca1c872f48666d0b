"""Re-export database models used by storage mixins."""

from zapscan.db.models import Scan, ScheduledScan, Settings, Vulnerability

__all__ = [
    "Scan",
    "ScheduledScan",
    "Settings",
    "Vulnerability",
]
