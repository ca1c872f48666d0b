"""Scan lifecycle state machine (pending -> running -> completed | failed)."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from zapscan.utils.timeutil import utc_now

from .severity import SeverityCounts

if TYPE_CHECKING:
    from zapscan.db.models import Scan
    from zapscan.modules.storage.protocol import ScanStore


class ScanStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanStatus.COMPLETED, ScanStatus.FAILED)


ALLOWED_TRANSITIONS: dict[ScanStatus, frozenset[ScanStatus]] = {
    ScanStatus.PENDING: frozenset({ScanStatus.RUNNING}),
    ScanStatus.RUNNING: frozenset({ScanStatus.COMPLETED, ScanStatus.FAILED}),
    ScanStatus.COMPLETED: frozenset(),
    ScanStatus.FAILED: frozenset(),
}


class LifecycleError(ValueError):
    """An illegal scan status transition was requested."""


class ScanNotFoundError(LookupError):
    """A lifecycle operation referenced a scan that does not exist."""


def can_transition(current: ScanStatus | str, target: ScanStatus | str) -> bool:
    return ScanStatus(target) in ALLOWED_TRANSITIONS[ScanStatus(current)]


class ScanLifecycle:
    """Drive one scan record through its status transitions.

    ``started_at`` is stamped only on the move to running and ``completed_at``
    only on the move to a terminal state, so each is written exactly once.
    Severity counters are written together with the terminal status.
    """

    def __init__(self, store: "ScanStore", scan_id: str):
        self.store = store
        self.scan_id = scan_id

    @property
    def status(self) -> ScanStatus:
        return ScanStatus(self._load().status)

    def start(self, now: datetime | None = None) -> "Scan":
        """Move a pending scan to running."""
        return self._transition(ScanStatus.RUNNING, started_at=now or utc_now())

    def complete(self, counts: SeverityCounts, now: datetime | None = None) -> "Scan":
        """Move a running scan to completed with its final counters."""
        return self._transition(
            ScanStatus.COMPLETED, completed_at=now or utc_now(), **counts.as_scan_fields()
        )

    def fail(self, counts: SeverityCounts, now: datetime | None = None) -> "Scan":
        """Move a running scan to failed with the counters of its error finding."""
        return self._transition(
            ScanStatus.FAILED, completed_at=now or utc_now(), **counts.as_scan_fields()
        )

    def _load(self) -> "Scan":
        scan = self.store.get_scan(self.scan_id)
        if scan is None:
            raise ScanNotFoundError(f"Scan not found: {self.scan_id}")
        return scan

    def _transition(self, target: ScanStatus, **fields) -> "Scan":
        current = ScanStatus(self._load().status)
        if not can_transition(current, target):
            raise LifecycleError(
                f"Scan {self.scan_id} cannot move from {current.value} to {target.value}"
            )
        return self.store.update_scan(self.scan_id, status=target.value, **fields)
