"""Calendar-aligned next-run computation for scheduled scans.

A schedule fires at its ``HH:MM`` wall-clock time. The first run is the next
occurrence of that time; every later run is exactly one calendar period after
the previous ``next_run``. Periods missed while the process was down collapse
into a single run. Periods are stepped in an IANA zone, so the wall-clock time
survives daylight saving changes.
"""

import calendar
import logging
import os
import re
from datetime import UTC, datetime, timedelta, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zapscan.utils.timeutil import ensure_utc

logger = logging.getLogger(__name__)

FREQUENCIES = ("daily", "weekly", "monthly", "quarterly", "annually")

_DAY_STEPS = {"daily": 1, "weekly": 7}
_MONTH_STEPS = {"monthly": 1, "quarterly": 3, "annually": 12}
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
LOCALTIME_PATH = Path("/etc/localtime")


def validate_frequency(frequency: str) -> str:
    """Return the normalized frequency name or raise ValueError."""
    name = str(frequency).strip().lower()
    if name not in FREQUENCIES:
        raise ValueError(
            f"Unknown frequency: {frequency!r}. Expected one of: {', '.join(FREQUENCIES)}"
        )
    return name


def parse_time(value: str) -> tuple[int, int]:
    """Parse ``HH:MM`` into hour and minute."""
    match = _TIME_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hour, minute


def add_months(value: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the end of shorter months."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def step(value: datetime, frequency: str) -> datetime:
    """Move *value* forward by one period of *frequency*."""
    frequency = validate_frequency(frequency)
    if frequency in _DAY_STEPS:
        return value + timedelta(days=_DAY_STEPS[frequency])
    return add_months(value, _MONTH_STEPS[frequency])


def load_zone(name: str) -> ZoneInfo:
    """Load an IANA zone such as ``Europe/Berlin`` or raise ValueError."""
    try:
        return ZoneInfo(name.strip().lstrip(":"))
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc


def _zone_names() -> list[str]:
    names = []
    if os.environ.get("TZ"):
        names.append(os.environ["TZ"])
    if LOCALTIME_PATH.is_symlink():
        target = str(LOCALTIME_PATH.resolve())
        if "zoneinfo/" in target:
            names.append(target.split("zoneinfo/", 1)[1])
    return names


def local_zone() -> tzinfo:
    """Return the host zone: ``TZ`` first, then the ``/etc/localtime`` link.

    Falls back to the current fixed UTC offset, which cannot follow DST changes.
    """
    for name in _zone_names():
        try:
            return load_zone(name)
        except ValueError:
            logger.debug("Ignoring unusable timezone %r", name)
    return datetime.now().astimezone().tzinfo or UTC


def _resolve_zone(tz: tzinfo | None) -> tzinfo:
    return tz if tz is not None else local_zone()


def first_run_at(time_of_day: str, now: datetime, tz: tzinfo | None = None) -> datetime:
    """Return the next occurrence of *time_of_day* at or after *now*, in UTC."""
    hour, minute = parse_time(time_of_day)
    zone = _resolve_zone(tz)
    local_now = now.astimezone(zone)
    candidate = local_now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate < local_now:
        candidate += timedelta(days=1)
    return candidate.astimezone(UTC)


def advance(
    next_run: datetime,
    frequency: str,
    now: datetime,
    tz: tzinfo | None = None,
) -> datetime:
    """Return the first period boundary after *now*, stepping from *next_run*."""
    zone = _resolve_zone(tz)
    candidate = ensure_utc(next_run).astimezone(zone)
    while candidate <= now:
        candidate = step(candidate, frequency)
    return candidate.astimezone(UTC)
