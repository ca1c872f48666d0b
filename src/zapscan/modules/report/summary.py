"""Dashboard summaries derived from scan records."""

from datetime import datetime, timedelta, tzinfo
from typing import Any

from zapscan.utils.timeutil import ensure_utc

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def describe_last_scan(scans: list[Any], now: datetime) -> str:
    """Describe when the newest scan finished.

    *scans* are ordered newest first, as returned by ``get_recent_scans``.
    """
    if not scans:
        return "Never"
    latest = scans[0]
    if latest.completed_at is None:
        return "In Progress"

    completed = ensure_utc(latest.completed_at)
    elapsed = ensure_utc(now) - completed
    minutes = int(elapsed.total_seconds() // 60)
    if minutes < 1:
        return "Just Now"
    if minutes < 60:
        return f"{minutes} min ago"
    if minutes < 24 * 60:
        return f"{minutes // 60} hours ago"
    return completed.strftime("%Y-%m-%d")


def weekly_activity(
    scans: list[Any], now: datetime, tz: tzinfo | None = None
) -> list[dict[str, Any]]:
    """Bucket scans started in the last seven days by weekday, Monday first."""
    buckets = [{"day": day, "scans": 0, "vulnerabilities": 0} for day in WEEKDAYS]
    now = ensure_utc(now)
    week_ago = now - timedelta(days=7)
    for scan in scans:
        if scan.started_at is None:
            continue
        started = ensure_utc(scan.started_at)
        if started < week_ago or started > now:
            continue
        if tz is not None:
            started = started.astimezone(tz)
        bucket = buckets[started.weekday()]
        bucket["scans"] += 1
        bucket["vulnerabilities"] += scan.total_vulnerabilities or 0
    return buckets
