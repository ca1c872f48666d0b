"""Severity levels and per-scan severity aggregation."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Ordinal risk level of a finding (Critical > High > Medium > Low)."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Higher rank means higher risk."""
        return _RANKS[self]

    @classmethod
    def parse(cls, value: "str | Severity") -> "Severity":
        """Parse a severity name case-insensitively."""
        if isinstance(value, Severity):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown severity: {value!r}")

    def __str__(self) -> str:
        return self.value


_RANKS = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

SEVERITY_ORDER = sorted(Severity, key=lambda severity: severity.rank, reverse=True)

_COUNTER_FIELDS = {
    Severity.CRITICAL: "critical",
    Severity.HIGH: "high",
    Severity.MEDIUM: "medium",
    Severity.LOW: "low",
}


@dataclass
class SeverityCounts:
    """Per-severity counters for one scan."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low

    def add(self, severity: Severity | str) -> None:
        """Increment the counter matching *severity*."""
        name = _COUNTER_FIELDS[Severity.parse(severity)]
        setattr(self, name, getattr(self, name) + 1)

    @classmethod
    def tally(cls, severities: Iterable[Severity | str]) -> "SeverityCounts":
        """Count severities in one pass."""
        counts = cls()
        for severity in severities:
            counts.add(severity)
        return counts

    def as_scan_fields(self) -> dict[str, int]:
        """Return the counters as scan record column values."""
        return {
            "total_vulnerabilities": self.total,
            "critical_count": self.critical,
            "high_count": self.high,
            "medium_count": self.medium,
            "low_count": self.low,
        }
