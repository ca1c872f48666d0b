"""Vulnerability record operations for StorageManager."""

from zapscan.modules.scanner.models import Finding

from .db_models import Vulnerability


class VulnerabilityMixin:
    """Provide finding persistence and lookup methods."""

    def create_vulnerability(self, finding: Finding) -> Vulnerability:
        """Persist one finding for its scan."""
        vulnerability = Vulnerability(
            scan_id=finding.scan_id,
            type=finding.type,
            severity=finding.severity.value,
            title=finding.title,
            description=finding.description,
            affected_url=finding.affected_url,
            remediation=finding.remediation,
            details=dict(finding.details) or None,
        )
        self.session.add(vulnerability)
        self.session.commit()
        return vulnerability

    def get_vulnerability(self, vulnerability_id: str) -> Vulnerability | None:
        """Get a vulnerability by id."""
        return self.session.get(Vulnerability, vulnerability_id)

    def get_vulnerabilities_by_scan(self, scan_id: str) -> list[Vulnerability]:
        """Get every vulnerability recorded for a scan."""
        return self.session.query(Vulnerability).filter_by(scan_id=scan_id).all()

    def delete_vulnerabilities_by_scan(self, scan_id: str) -> bool:
        """Delete all vulnerabilities of a scan."""
        self.session.query(Vulnerability).filter_by(scan_id=scan_id).delete()
        self.session.commit()
        return True
