"""Tests for schedule timing and the scan scheduler."""

from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import httpx
import pytest
import respx
from httpx import Response

from zapscan.modules.scanner import ScanOrchestrator
from zapscan.modules.scheduler import ScanScheduler
from zapscan.modules.scheduler.timing import (
    add_months,
    advance,
    first_run_at,
    load_zone,
    local_zone,
    parse_time,
    validate_frequency,
)
from zapscan.utils.timeutil import ensure_utc

NOW = datetime(2026, 3, 10, 8, 0, tzinfo=UTC)


class TestParsing:
    """Tests for frequency and time parsing."""

    def test_parse_time(self):
        """Test parsing HH:MM."""
        assert parse_time("09:30") == (9, 30)
        assert parse_time("7:05") == (7, 5)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "9", ""])
    def test_parse_time_rejects_invalid(self, value):
        """Test invalid times are rejected."""
        with pytest.raises(ValueError):
            parse_time(value)

    def test_validate_frequency(self):
        """Test frequency validation."""
        assert validate_frequency(" Weekly ") == "weekly"
        with pytest.raises(ValueError):
            validate_frequency("hourly")


class TestNextRun:
    """Tests for calendar-aligned next-run computation."""

    def test_first_run_later_today(self):
        """Test first run later today."""
        assert first_run_at("09:15", NOW, tz=UTC) == datetime(2026, 3, 10, 9, 15, tzinfo=UTC)

    def test_first_run_at_now_is_today(self):
        """Test first run at now is today."""
        assert first_run_at("08:00", NOW, tz=UTC) == NOW

    def test_first_run_tomorrow(self):
        """Test first run tomorrow."""
        assert first_run_at("07:59", NOW, tz=UTC) == datetime(2026, 3, 11, 7, 59, tzinfo=UTC)

    def test_first_run_uses_local_wall_clock(self):
        """Test first run uses local wall clock."""
        plus_two = timezone(timedelta(hours=2))
        # 08:00 UTC is 10:00 at +02:00, so 09:00 local has passed for today.
        assert first_run_at("09:00", NOW, tz=plus_two) == datetime(2026, 3, 11, 7, 0, tzinfo=UTC)

    def test_advance_daily(self):
        """Test advancing a daily schedule."""
        assert advance(NOW, "daily", NOW, tz=UTC) == NOW + timedelta(days=1)

    def test_advance_weekly(self):
        """Test advancing a weekly schedule."""
        assert advance(NOW, "weekly", NOW, tz=UTC) == NOW + timedelta(days=7)

    def test_missed_periods_collapse_into_one(self):
        """Test missed periods collapse into one."""
        next_run = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        now = datetime(2026, 3, 5, 12, 0, tzinfo=UTC)
        assert advance(next_run, "daily", now, tz=UTC) == datetime(2026, 3, 6, 9, 0, tzinfo=UTC)

    def test_monthly_clamps_to_month_end(self):
        """Test monthly clamps to month end."""
        next_run = datetime(2026, 1, 31, 9, 0, tzinfo=UTC)
        assert advance(next_run, "monthly", next_run, tz=UTC) == datetime(
            2026, 2, 28, 9, 0, tzinfo=UTC
        )

    def test_quarterly_and_annually(self):
        """Test quarterly and annually."""
        assert advance(NOW, "quarterly", NOW, tz=UTC) == datetime(2026, 6, 10, 8, 0, tzinfo=UTC)
        assert advance(NOW, "annually", NOW, tz=UTC) == datetime(2027, 3, 10, 8, 0, tzinfo=UTC)

    def test_naive_next_run_is_treated_as_utc(self):
        """Test naive next run is treated as utc."""
        naive = datetime(2026, 3, 10, 8, 0)
        assert advance(naive, "daily", NOW, tz=UTC) == NOW + timedelta(days=1)

    def test_add_months_across_year(self):
        """Test add months across year."""
        assert add_months(datetime(2026, 11, 30), 3) == datetime(2027, 2, 28)


class TestDaylightSaving:
    """Tests that schedules keep their local time across DST changes."""

    BERLIN = ZoneInfo("Europe/Berlin")

    def test_daily_keeps_wall_clock_across_spring_forward(self):
        """Test a 03:00 daily schedule still fires at 03:00 after clocks move forward."""
        first = first_run_at("03:00", datetime(2026, 3, 20, 12, 0, tzinfo=UTC), tz=self.BERLIN)
        assert first == datetime(2026, 3, 21, 2, 0, tzinfo=UTC)

        later = advance(first, "daily", datetime(2026, 3, 30, 2, 30, tzinfo=UTC), tz=self.BERLIN)

        assert later == datetime(2026, 3, 31, 1, 0, tzinfo=UTC)
        assert later.astimezone(self.BERLIN).hour == 3

    def test_daily_keeps_wall_clock_across_fall_back(self):
        """Test a 03:00 daily schedule still fires at 03:00 after clocks move back."""
        next_run = datetime(2026, 10, 24, 1, 0, tzinfo=UTC)

        later = advance(next_run, "daily", next_run, tz=self.BERLIN)

        assert later == datetime(2026, 10, 25, 2, 0, tzinfo=UTC)

    def test_host_zone_comes_from_tz_variable(self, monkeypatch):
        """Test the TZ variable selects the zone when none is passed."""
        monkeypatch.setenv("TZ", "Europe/Berlin")

        assert local_zone() == self.BERLIN
        first = first_run_at("03:00", datetime(2026, 3, 28, 12, 0, tzinfo=UTC))
        assert advance(first, "daily", first) == datetime(2026, 3, 30, 1, 0, tzinfo=UTC)

    def test_unknown_zone(self):
        """Test an unknown zone name is rejected."""
        with pytest.raises(ValueError, match="Unknown timezone"):
            load_zone("Mars/Olympus_Mons")


@pytest.fixture
def orchestrator(storage):
    return ScanOrchestrator(storage)


@pytest.fixture
def scheduler(storage, orchestrator):
    return ScanScheduler(storage, orchestrator, tz=UTC)


class TestScanScheduler:
    """Tests for ScanScheduler ticks."""

    @respx.mock
    async def test_tick_starts_due_schedule(self, storage, scheduler, security_headers):
        """Test tick starts due schedule."""
        respx.get("https://example.com").mock(
            return_value=Response(200, html="<p>ok</p>", headers=security_headers)
        )
        entry = storage.create_scheduled_scan(
            "https://example.com", "daily", "08:00", now=NOW, tz=UTC
        )

        started = scheduler.tick(NOW)
        await scheduler.drain()

        assert len(started) == 1
        scan = storage.get_scan(started[0].id)
        assert scan.scan_type == "quick"
        assert scan.target_url == "https://example.com"
        assert scan.status == "completed"

        entry = storage.get_scheduled_scan(entry.id)
        assert ensure_utc(entry.last_run) == NOW
        assert ensure_utc(entry.next_run) == NOW + timedelta(days=1)

    async def test_tick_skips_schedules_not_due(self, storage, scheduler):
        """Test tick skips schedules not due."""
        storage.create_scheduled_scan("https://example.com", "daily", "09:00", now=NOW, tz=UTC)
        storage.create_scheduled_scan(
            "https://example.com", "daily", "08:00", enabled=False, now=NOW, tz=UTC
        )

        assert scheduler.tick(NOW) == []
        assert storage.get_all_scans() == []

    @respx.mock
    async def test_each_run_creates_a_new_scan(self, storage, scheduler, security_headers):
        """Test each run creates a new scan."""
        respx.get("https://example.com").mock(
            return_value=Response(200, html="<p>ok</p>", headers=security_headers)
        )
        storage.create_scheduled_scan("https://example.com", "daily", "08:00", now=NOW, tz=UTC)

        first = scheduler.tick(NOW)
        await scheduler.drain()
        assert scheduler.tick(NOW + timedelta(hours=1)) == []
        second = scheduler.tick(NOW + timedelta(days=1))
        await scheduler.drain()

        assert first[0].id != second[0].id
        assert len(storage.get_all_scans()) == 2

    @respx.mock
    async def test_failed_background_scan_is_recorded(self, storage, scheduler):
        """Test failed background scan is recorded."""
        respx.get("https://down.example").mock(side_effect=httpx.ConnectError("refused"))
        storage.create_scheduled_scan("https://down.example", "weekly", "08:00", now=NOW, tz=UTC)

        started = scheduler.tick(NOW)
        await scheduler.drain()

        assert storage.get_scan(started[0].id).status == "failed"

    async def test_run_once(self, storage, scheduler):
        """Test a single scheduler loop iteration."""
        await scheduler.run(interval=0.01, once=True)
        assert storage.get_all_scans() == []
