"""Recurring scan schedules."""

from .scheduler import DEFAULT_INTERVAL, ScanScheduler
from .timing import FREQUENCIES, advance, first_run_at, parse_time, validate_frequency

__all__ = [
    "DEFAULT_INTERVAL",
    "FREQUENCIES",
    "ScanScheduler",
    "advance",
    "first_run_at",
    "parse_time",
    "validate_frequency",
]
