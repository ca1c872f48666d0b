"""Scan record operations for StorageManager."""

from typing import Any

from zapscan.modules.scanner.models import normalize_scan_type

from .db_models import Scan

_UPDATABLE_FIELDS = frozenset(
    {
        "status",
        "started_at",
        "completed_at",
        "total_vulnerabilities",
        "critical_count",
        "high_count",
        "medium_count",
        "low_count",
    }
)

# Never-started scans sort after started ones.
_NEWEST_FIRST = (Scan.started_at.is_(None), Scan.started_at.desc(), Scan.created_at.desc())


class ScanMixin:
    """Provide scan creation, lookup and update methods."""

    def create_scan(self, target_url: str, scan_type: str = "quick") -> Scan:
        """Create a pending scan record."""
        scan = Scan(target_url=target_url, scan_type=normalize_scan_type(scan_type))
        self.session.add(scan)
        self.session.commit()
        return scan

    def get_scan(self, scan_id: str) -> Scan | None:
        """Get a scan by id."""
        return self.session.get(Scan, scan_id)

    def get_all_scans(self) -> list[Scan]:
        """Get every scan, most recently started first."""
        return self.session.query(Scan).order_by(*_NEWEST_FIRST).all()

    def get_recent_scans(self, limit: int) -> list[Scan]:
        """Get the *limit* most recently started scans."""
        return self.session.query(Scan).order_by(*_NEWEST_FIRST).limit(limit).all()

    def update_scan(self, scan_id: str, **changes: Any) -> Scan | None:
        """Apply a partial update to a scan."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown scan field(s): {', '.join(sorted(unknown))}")

        scan = self.get_scan(scan_id)
        if scan is None:
            return None
        for name, value in changes.items():
            setattr(scan, name, value)
        self.session.commit()
        return scan

    def delete_scan(self, scan_id: str) -> bool:
        """Delete a scan together with its vulnerabilities."""
        scan = self.get_scan(scan_id)
        if scan is None:
            return False
        self.session.delete(scan)
        self.session.commit()
        return True
