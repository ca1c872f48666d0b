"""Tests for the scan orchestrator."""

import logging

import httpx
import pytest
import respx
from httpx import Response

from zapscan.modules.scanner import (
    InvalidTargetError,
    LifecycleError,
    ScanOrchestrator,
    parse_target_url,
)

EXTENDED_TYPES = {"Mixed Content", "Outdated Library", "Open Redirect", "Information"}


@pytest.fixture
def orchestrator(storage) -> ScanOrchestrator:
    return ScanOrchestrator(storage)


def _assert_consistent(scan, vulnerabilities) -> None:
    counted = scan.critical_count + scan.high_count + scan.medium_count + scan.low_count
    assert counted == scan.total_vulnerabilities == len(vulnerabilities)


class TestParseTargetUrl:
    """Tests for target URL validation."""

    def test_absolute_url(self):
        """Test an absolute URL is accepted."""
        assert parse_target_url(" https://example.com/path ") == "https://example.com/path"

    @pytest.mark.parametrize("value", ["not a valid url", "example.com", "/relative", "", None])
    def test_rejects_non_absolute(self, value):
        """Test non-absolute targets are rejected."""
        with pytest.raises(InvalidTargetError):
            parse_target_url(value)


class TestPerformScan:
    """End-to-end scans against mocked responses."""

    @respx.mock
    async def test_invalid_url_fails_without_fetch(self, storage, orchestrator):
        """Test invalid url fails without fetch."""
        scan = storage.create_scan("not a valid url")

        outcome = await orchestrator.perform_scan(scan.id, "not a valid url", "quick")

        assert respx.calls.call_count == 0
        scan = storage.get_scan(scan.id)
        assert scan.status == "failed"
        assert scan.low_count == 1
        assert scan.total_vulnerabilities == 1
        assert scan.started_at is not None
        assert scan.completed_at is not None

        vulnerabilities = storage.get_vulnerabilities_by_scan(scan.id)
        assert [v.type for v in vulnerabilities] == ["Scan Error"]
        assert vulnerabilities[0].severity == "Low"
        assert outcome.total == 1

    @respx.mock
    async def test_hardened_page_is_clean(
        self, storage, orchestrator, security_headers, minimal_page
    ):
        """Test hardened page is clean."""
        respx.get("https://example.com").mock(
            return_value=Response(200, html=minimal_page, headers=security_headers)
        )
        scan = storage.create_scan("https://example.com")

        outcome = await orchestrator.perform_scan(scan.id, "https://example.com", "quick")

        scan = storage.get_scan(scan.id)
        assert scan.status == "completed"
        assert scan.total_vulnerabilities == 0
        assert (scan.critical_count, scan.high_count, scan.medium_count, scan.low_count) == (
            0,
            0,
            0,
            0,
        )
        assert outcome.findings == []
        assert storage.get_vulnerabilities_by_scan(scan.id) == []

    @respx.mock
    async def test_single_fetch_with_user_agent(self, storage, security_headers):
        """Test single fetch with user agent."""
        route = respx.get("https://example.com").mock(
            return_value=Response(200, html="<p>x</p>", headers=security_headers)
        )
        orchestrator = ScanOrchestrator(storage, user_agent="Custom-Agent/2.0")
        scan = storage.create_scan("https://example.com")

        await orchestrator.perform_scan(scan.id, "https://example.com")

        assert route.call_count == 1
        assert route.calls.last.request.headers["user-agent"] == "Custom-Agent/2.0"

    @respx.mock
    async def test_fetch_is_logged_with_timing(self, storage, orchestrator, caplog):
        """Test the fetch is logged with status and response time."""
        respx.get("https://example.com").mock(return_value=Response(204))
        scan = storage.create_scan("https://example.com")

        with caplog.at_level(logging.DEBUG, logger="zapscan.modules.scanner.main"):
            await orchestrator.perform_scan(scan.id, "https://example.com")

        assert "HTTP 204 in" in caplog.text

    @respx.mock
    async def test_quick_scan_skips_extended_checks(self, storage, orchestrator, vulnerable_page):
        """Test quick scan skips extended checks."""
        respx.get("https://example.com").mock(return_value=Response(200, html=vulnerable_page))
        scan = storage.create_scan("https://example.com", "quick")

        await orchestrator.perform_scan(scan.id, "https://example.com", "quick")

        vulnerabilities = storage.get_vulnerabilities_by_scan(scan.id)
        types = {v.type for v in vulnerabilities}
        assert {"Missing Security Header", "Potential XSS", "CSRF"} <= types
        assert "Information Disclosure" in types
        assert not types & EXTENDED_TYPES
        _assert_consistent(storage.get_scan(scan.id), vulnerabilities)

    @pytest.mark.parametrize("scan_type", ["deep", "full"])
    @respx.mock
    async def test_deep_scans_run_extended_checks(
        self, storage, orchestrator, vulnerable_page, scan_type
    ):
        """Test deep scans run extended checks."""
        respx.get("https://example.com").mock(return_value=Response(200, html=vulnerable_page))
        scan = storage.create_scan("https://example.com", scan_type)

        await orchestrator.perform_scan(scan.id, "https://example.com", scan_type)

        vulnerabilities = storage.get_vulnerabilities_by_scan(scan.id)
        assert EXTENDED_TYPES <= {v.type for v in vulnerabilities}
        scan = storage.get_scan(scan.id)
        assert scan.status == "completed"
        _assert_consistent(scan, vulnerabilities)

    @respx.mock
    async def test_http_login_page(self, storage, orchestrator):
        """Test a login page over HTTP."""
        page = '<form method="POST"><input name="user"><input type="password"></form>'
        respx.get("http://site/login").mock(return_value=Response(200, html=page))
        scan = storage.create_scan("http://site/login")

        outcome = await orchestrator.perform_scan(scan.id, "http://site/login", "quick")

        titles = {finding.title for finding in outcome.findings}
        assert "Form Without CSRF Protection" in titles
        assert "Password Field Over HTTP" in titles
        assert "Insecure Protocol" in {finding.type for finding in outcome.findings}
        assert storage.get_scan(scan.id).critical_count == 1

    @respx.mock
    async def test_error_status_is_analyzed(self, storage, orchestrator):
        """Test error status is analyzed."""
        respx.get("https://example.com/missing").mock(
            return_value=Response(404, html="<h1>Not Found</h1>")
        )
        scan = storage.create_scan("https://example.com/missing")

        await orchestrator.perform_scan(scan.id, "https://example.com/missing")

        scan = storage.get_scan(scan.id)
        assert scan.status == "completed"
        assert scan.total_vulnerabilities == 5

    @respx.mock
    async def test_non_markup_body_skips_body_checks(self, storage, orchestrator):
        """Test non markup body skips body checks."""
        respx.get("https://api.example.com").mock(
            return_value=Response(200, json={"message": "Fatal error: stack trace follows"})
        )
        scan = storage.create_scan("https://api.example.com")

        outcome = await orchestrator.perform_scan(scan.id, "https://api.example.com", "deep")

        assert {finding.type for finding in outcome.findings} == {"Missing Security Header"}
        assert storage.get_scan(scan.id).status == "completed"

    @respx.mock
    async def test_network_error_fails_scan(self, storage, orchestrator):
        """Test network error fails scan."""
        respx.get("https://down.example").mock(side_effect=httpx.ConnectError("connection refused"))
        scan = storage.create_scan("https://down.example")

        outcome = await orchestrator.perform_scan(scan.id, "https://down.example")

        scan = storage.get_scan(scan.id)
        assert scan.status == "failed"
        assert (scan.low_count, scan.total_vulnerabilities) == (1, 1)
        [finding] = outcome.findings
        assert finding.type == "Scan Error"
        assert "connection refused" in finding.description

    @respx.mock
    async def test_timeout_fails_scan(self, storage, orchestrator):
        """Test timeout fails scan."""
        respx.get("https://slow.example").mock(side_effect=httpx.ReadTimeout("timed out"))
        scan = storage.create_scan("https://slow.example")

        await orchestrator.perform_scan(scan.id, "https://slow.example")

        assert storage.get_scan(scan.id).status == "failed"

    @respx.mock
    async def test_finished_scan_is_not_rerun(self, storage, orchestrator, security_headers):
        """Test finished scan is not rerun."""
        route = respx.get("https://example.com").mock(
            return_value=Response(200, html="<p>x</p>", headers=security_headers)
        )
        scan = storage.create_scan("https://example.com")
        await orchestrator.perform_scan(scan.id, "https://example.com")

        with pytest.raises(LifecycleError):
            await orchestrator.perform_scan(scan.id, "https://example.com")
        assert route.call_count == 1


class TestStartScan:
    """Tests for fire-and-forget scans."""

    @respx.mock
    async def test_start_scan_returns_pending_record(self, storage, orchestrator, security_headers):
        """Test start scan returns pending record."""
        respx.get("https://example.com").mock(
            return_value=Response(200, html="<p>x</p>", headers=security_headers)
        )

        scan = orchestrator.start_scan("https://example.com", "deep")

        assert scan.status == "pending"
        assert orchestrator.pending_tasks == 1
        await orchestrator.drain()
        assert orchestrator.pending_tasks == 0
        assert storage.get_scan(scan.id).status == "completed"

    @respx.mock
    async def test_concurrent_scans_are_independent(self, storage, orchestrator, security_headers):
        """Test concurrent scans are independent."""
        respx.get("https://a.example").mock(
            return_value=Response(200, html="<p>a</p>", headers=security_headers)
        )
        respx.get("https://b.example").mock(side_effect=httpx.ConnectError("down"))

        first = orchestrator.start_scan("https://a.example")
        second = orchestrator.start_scan("https://b.example")
        await orchestrator.drain()

        assert storage.get_scan(first.id).status == "completed"
        assert storage.get_scan(second.id).status == "failed"
        assert storage.get_vulnerabilities_by_scan(first.id) == []
        assert len(storage.get_vulnerabilities_by_scan(second.id)) == 1
