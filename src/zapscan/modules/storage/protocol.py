"""Storage interface the scan engine depends on."""

from typing import Any, Protocol

from zapscan.db.models import Scan, Vulnerability
from zapscan.modules.scanner.models import Finding


class ScanStore(Protocol):
    """Persistence operations used by the orchestrator and scheduler."""

    def create_scan(self, target_url: str, scan_type: str = "quick") -> Scan: ...

    def get_scan(self, scan_id: str) -> Scan | None: ...

    def update_scan(self, scan_id: str, **changes: Any) -> Scan | None: ...

    def create_vulnerability(self, finding: Finding) -> Vulnerability: ...

    def get_vulnerabilities_by_scan(self, scan_id: str) -> list[Vulnerability]: ...

    def delete_vulnerabilities_by_scan(self, scan_id: str) -> bool: ...

    def get_recent_scans(self, limit: int) -> list[Scan]: ...
