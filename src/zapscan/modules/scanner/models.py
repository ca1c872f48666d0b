"""Data models for scanner findings and scan outcomes."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .severity import Severity, SeverityCounts

SCAN_TYPES = ("quick", "deep", "full")
EXTENDED_SCAN_TYPES = frozenset({"deep", "full"})


def normalize_scan_type(scan_type: str | None, default: str = "quick") -> str:
    """Normalize a scan type name, falling back to *default* when unknown."""
    name = scan_type.strip().lower() if isinstance(scan_type, str) else default
    return name if name in SCAN_TYPES else default


def runs_extended_checks(scan_type: str | None) -> bool:
    """Return True when the scan type enables the extended inspector."""
    return normalize_scan_type(scan_type) in EXTENDED_SCAN_TYPES


@dataclass(frozen=True)
class Finding:
    """A single security issue reported for one scan.

    ``details`` is a read-only mapping whose keys depend on the detection rule
    that produced the finding (for example ``header``, ``count`` or ``version``).
    """

    scan_id: str
    type: str
    severity: Severity
    title: str
    description: str
    affected_url: str
    remediation: str | None = None
    details: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.parse(self.severity))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details or {})))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the finding for storage and reports."""
        return {
            "scan_id": self.scan_id,
            "type": self.type,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "affected_url": self.affected_url,
            "remediation": self.remediation,
            "details": dict(self.details),
        }


@dataclass
class ScanOutcome:
    """Findings of one scan pass plus per-severity counters."""

    findings: list[Finding] = field(default_factory=list)
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0

    @property
    def total(self) -> int:
        return self.critical_count + self.high_count + self.medium_count + self.low_count

    @property
    def counts(self) -> SeverityCounts:
        return SeverityCounts(
            critical=self.critical_count,
            high=self.high_count,
            medium=self.medium_count,
            low=self.low_count,
        )

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> "ScanOutcome":
        """Aggregate findings into counters."""
        counts = SeverityCounts.tally(finding.severity for finding in findings)
        return cls(
            findings=list(findings),
            critical_count=counts.critical,
            high_count=counts.high,
            medium_count=counts.medium,
            low_count=counts.low,
        )
