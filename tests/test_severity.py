"""Tests for severity levels and outcome aggregation."""

import pytest

from zapscan.modules.scanner.findings import build_scan_error
from zapscan.modules.scanner.models import Finding, ScanOutcome
from zapscan.modules.scanner.severity import (
    SEVERITY_ORDER,
    Severity,
    SeverityCounts,
)


def _finding(severity: str) -> Finding:
    return Finding(
        scan_id="scan-1",
        type="Test",
        severity=severity,
        title=f"{severity} finding",
        description="desc",
        affected_url="https://example.com",
    )


class TestSeverity:
    """Tests for the Severity enum."""

    def test_order_is_critical_to_low(self):
        """Test order is critical to low."""
        assert SEVERITY_ORDER == [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]

    def test_rank_is_total_order(self):
        """Test rank is total order."""
        assert Severity.CRITICAL.rank > Severity.HIGH.rank > Severity.MEDIUM.rank
        assert Severity.MEDIUM.rank > Severity.LOW.rank

    def test_parse_is_case_insensitive(self):
        """Test parse is case insensitive."""
        assert Severity.parse("critical") is Severity.CRITICAL
        assert Severity.parse(" HIGH ") is Severity.HIGH
        assert Severity.parse(Severity.LOW) is Severity.LOW

    def test_parse_rejects_unknown(self):
        """Test parse rejects unknown."""
        with pytest.raises(ValueError):
            Severity.parse("info")

    def test_str_is_display_value(self):
        """Test str is display value."""
        assert str(Severity.MEDIUM) == "Medium"


class TestSeverityCounts:
    """Tests for per-scan counters."""

    def test_tally_counts_each_level(self):
        """Test tally counts each level."""
        counts = SeverityCounts.tally(["High", "Low", "Low", Severity.CRITICAL])
        assert (counts.critical, counts.high, counts.medium, counts.low) == (1, 1, 0, 2)
        assert counts.total == 4

    def test_as_scan_fields(self):
        """Test counters map to scan columns."""
        counts = SeverityCounts(critical=1, high=2, medium=3, low=4)
        assert counts.as_scan_fields() == {
            "total_vulnerabilities": 10,
            "critical_count": 1,
            "high_count": 2,
            "medium_count": 3,
            "low_count": 4,
        }


class TestScanOutcome:
    """Tests for ScanOutcome aggregation."""

    def test_counters_sum_to_total(self):
        """Test counters sum to total."""
        findings = [_finding(s) for s in ("Critical", "High", "High", "Medium", "Low")]
        outcome = ScanOutcome.from_findings(findings)

        assert outcome.critical_count == 1
        assert outcome.high_count == 2
        assert outcome.medium_count == 1
        assert outcome.low_count == 1
        assert outcome.total == len(findings) == outcome.counts.total

    def test_empty_outcome(self):
        """Test an outcome without findings."""
        outcome = ScanOutcome.from_findings([])
        assert outcome.total == 0
        assert outcome.findings == []


class TestFinding:
    """Tests for the Finding record."""

    def test_details_are_read_only(self):
        """Test details are read only."""
        finding = Finding(
            scan_id="s",
            type="t",
            severity="Low",
            title="x",
            description="d",
            affected_url="https://example.com",
            details={"count": 2},
        )
        with pytest.raises(TypeError):
            finding.details["count"] = 3

    def test_to_dict(self):
        """Test finding serialization."""
        data = _finding("High").to_dict()
        assert data["severity"] == "High"
        assert data["details"] == {}
        assert data["remediation"] is None

    def test_scan_error_embeds_message(self):
        """Test scan error embeds message."""
        finding = build_scan_error("s", "not a valid url", ValueError("Invalid URL: nope"))
        assert finding.type == "Scan Error"
        assert finding.severity is Severity.LOW
        assert "Invalid URL: nope" in finding.description
        assert finding.details["error"] == "Invalid URL: nope"

    def test_scan_error_without_message_uses_exception_name(self):
        """Test scan error without message uses exception name."""
        finding = build_scan_error("s", "https://example.com", TimeoutError())
        assert finding.details["error"] == "TimeoutError"
