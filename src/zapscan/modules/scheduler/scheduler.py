"""Clock-driven trigger for scheduled scans."""

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from zapscan.utils.timeutil import utc_now

from .timing import advance

if TYPE_CHECKING:
    from zapscan.db.models import Scan
    from zapscan.modules.scanner.main import ScanOrchestrator
    from zapscan.modules.storage.manager import StorageManager

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0


class ScanScheduler:
    """Fire due schedules as fresh quick scans.

    Each due schedule gets a new scan record (scans are never re-run in place),
    the scan is started in the background and the schedule's ``next_run`` moves
    to the first period boundary after *now*.
    """

    def __init__(
        self,
        store: "StorageManager",
        orchestrator: "ScanOrchestrator",
        tz: tzinfo | None = None,
    ):
        self.store = store
        self.orchestrator = orchestrator
        self.tz = tz

    def tick(self, now: datetime | None = None) -> list["Scan"]:
        """Start every due schedule once and return the created scans."""
        now = now or utc_now()
        started: list[Scan] = []
        for schedule in self.store.get_due_scheduled_scans(now):
            logger.info("Running scheduled scan %s for %s", schedule.id, schedule.target_url)
            scan = self.store.create_scan(schedule.target_url, "quick")
            self.orchestrator.spawn(scan.id, scan.target_url, scan.scan_type)
            self.store.update_scheduled_scan(
                schedule.id,
                last_run=now,
                next_run=advance(schedule.next_run, schedule.frequency, now, self.tz),
            )
            started.append(scan)
        return started

    async def run(self, interval: float = DEFAULT_INTERVAL, once: bool = False) -> None:
        """Tick every *interval* seconds until cancelled."""
        logger.info("Scheduler started (interval %ss)", interval)
        while True:
            self.tick()
            if once:
                break
            await asyncio.sleep(interval)

    async def drain(self) -> None:
        await self.orchestrator.drain()
