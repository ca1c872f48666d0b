"""Scheduled scan operations for StorageManager."""

from datetime import UTC, datetime, tzinfo
from typing import Any

from zapscan.modules.scheduler.timing import first_run_at, parse_time, validate_frequency
from zapscan.utils.timeutil import ensure_utc, utc_now

from .db_models import ScheduledScan

_UPDATABLE_FIELDS = frozenset(
    {"target_url", "frequency", "time", "enabled", "last_run", "next_run"}
)
_TIMING_FIELDS = frozenset({"frequency", "time", "enabled"})


class ScheduleMixin:
    """Provide scheduled scan CRUD with deterministic next-run computation."""

    def create_scheduled_scan(
        self,
        target_url: str,
        frequency: str,
        time: str,
        enabled: bool = True,
        now: datetime | None = None,
        tz: tzinfo | None = None,
    ) -> ScheduledScan:
        """Create a schedule and compute its first run."""
        frequency = validate_frequency(frequency)
        parse_time(time)
        schedule = ScheduledScan(
            target_url=target_url,
            frequency=frequency,
            time=time,
            enabled=enabled,
            next_run=first_run_at(time, now or utc_now(), tz) if enabled else None,
        )
        self.session.add(schedule)
        self.session.commit()
        return schedule

    def get_scheduled_scan(self, schedule_id: str) -> ScheduledScan | None:
        """Get a schedule by id."""
        return self.session.get(ScheduledScan, schedule_id)

    def get_all_scheduled_scans(self) -> list[ScheduledScan]:
        """Get every schedule."""
        return self.session.query(ScheduledScan).order_by(ScheduledScan.next_run).all()

    def get_due_scheduled_scans(self, now: datetime) -> list[ScheduledScan]:
        """Get enabled schedules whose next run is at or before *now*."""
        return (
            self.session.query(ScheduledScan)
            .filter(ScheduledScan.enabled.is_(True))
            .filter(ScheduledScan.next_run.isnot(None))
            .filter(ScheduledScan.next_run <= ensure_utc(now).astimezone(UTC))
            .order_by(ScheduledScan.next_run)
            .all()
        )

    def update_scheduled_scan(
        self,
        schedule_id: str,
        now: datetime | None = None,
        tz: tzinfo | None = None,
        **changes: Any,
    ) -> ScheduledScan | None:
        """Apply a partial update; timing changes recompute the next run."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown schedule field(s): {', '.join(sorted(unknown))}")
        if "frequency" in changes:
            changes["frequency"] = validate_frequency(changes["frequency"])
        if "time" in changes:
            parse_time(changes["time"])

        schedule = self.get_scheduled_scan(schedule_id)
        if schedule is None:
            return None
        for name, value in changes.items():
            setattr(schedule, name, value)

        if "next_run" not in changes and _TIMING_FIELDS & set(changes):
            schedule.next_run = (
                first_run_at(schedule.time, now or utc_now(), tz) if schedule.enabled else None
            )
        self.session.commit()
        return schedule

    def delete_scheduled_scan(self, schedule_id: str) -> bool:
        """Delete a schedule."""
        schedule = self.get_scheduled_scan(schedule_id)
        if schedule is None:
            return False
        self.session.delete(schedule)
        self.session.commit()
        return True
