"""Aggregate statistics for StorageManager."""

from sqlalchemy import func

from .db_models import Scan, ScheduledScan


def _sum(column):
    return func.coalesce(func.sum(column), 0)


class StatsMixin:
    """Provide dashboard totals."""

    def get_stats(self) -> dict[str, int]:
        """Return scan counts and severity totals summed over every scan."""
        total, critical, high, medium, low = self.session.query(
            _sum(Scan.total_vulnerabilities),
            _sum(Scan.critical_count),
            _sum(Scan.high_count),
            _sum(Scan.medium_count),
            _sum(Scan.low_count),
        ).one()
        by_status = dict(
            self.session.query(Scan.status, func.count(Scan.id)).group_by(Scan.status).all()
        )
        return {
            "total_scans": sum(by_status.values()),
            "completed_scans": by_status.get("completed", 0),
            "failed_scans": by_status.get("failed", 0),
            "active_scans": by_status.get("pending", 0) + by_status.get("running", 0),
            "total_vulnerabilities": int(total),
            "critical": int(critical),
            "high": int(high),
            "medium": int(medium),
            "low": int(low),
            "scheduled_scans": self.session.query(ScheduledScan).count(),
        }
