"""Main scanner orchestration."""

import asyncio
import logging
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from bs4 import BeautifulSoup, ParserRejectedMarkup

from zapscan.tools.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HTTPClient

from .checks import (
    check_extended,
    check_forms,
    check_information_disclosure,
    check_protocol,
    check_script_injection,
    check_security_headers,
)
from .findings import build_scan_error
from .lifecycle import ScanLifecycle
from .models import Finding, ScanOutcome, normalize_scan_type, runs_extended_checks

if TYPE_CHECKING:
    from zapscan.db.models import Scan
    from zapscan.modules.storage.protocol import ScanStore

logger = logging.getLogger(__name__)


class InvalidTargetError(ValueError):
    """The target is not an absolute URL."""


def parse_target_url(target_url: str) -> str:
    """Return the stripped URL, or raise InvalidTargetError without touching the network."""
    candidate = str(target_url or "").strip()
    parsed = urlparse(candidate)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidTargetError(f"Invalid URL: {target_url}")
    return candidate


def parse_markup(body: str) -> BeautifulSoup | None:
    """Parse a response body, returning None when the parser rejects it."""
    try:
        return BeautifulSoup(body, "html.parser")
    except ParserRejectedMarkup:
        logger.debug("Body rejected by markup parser", exc_info=True)
        return None


class ScanOrchestrator:
    """Run the single-fetch inspection pass and drive each scan's lifecycle."""

    def __init__(
        self,
        store: "ScanStore",
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = False,
        client_factory: Callable[[], HTTPClient] | None = None,
    ):
        self.store = store
        self.client_factory = client_factory or partial(
            HTTPClient, timeout=timeout, user_agent=user_agent, verify_ssl=verify_tls
        )
        self._tasks: set[asyncio.Task] = set()

    async def perform_scan(
        self, scan_id: str, target_url: str, scan_type: str = "quick"
    ) -> ScanOutcome:
        """Fetch the target once, inspect it and persist the outcome.

        The scan must be pending. Fetch, parse and inspection errors end the scan
        as failed with a single "Scan Error" finding; storage errors propagate.
        """
        scan_type = normalize_scan_type(scan_type)
        lifecycle = ScanLifecycle(self.store, scan_id)
        lifecycle.start()
        logger.info("Starting %s scan %s of %s", scan_type, scan_id, target_url)

        try:
            findings = await self._inspect(scan_id, parse_target_url(target_url), scan_type)
        except Exception as exc:
            return self._fail(lifecycle, scan_id, target_url, exc)

        outcome = ScanOutcome.from_findings(findings)
        for finding in outcome.findings:
            self.store.create_vulnerability(finding)
        lifecycle.complete(outcome.counts)
        logger.info("Scan %s completed with %d findings", scan_id, outcome.total)
        return outcome

    async def _inspect(self, scan_id: str, target_url: str, scan_type: str) -> list[Finding]:
        async with self.client_factory() as client:
            response = await client.get(target_url)
        logger.debug(
            "Fetched %s: HTTP %s in %.2fs",
            response.url,
            response.status_code,
            response.response_time,
        )

        findings = check_security_headers(scan_id, target_url, response.headers)
        findings.extend(check_protocol(scan_id, target_url))
        if not response.is_markup:
            return findings

        soup = parse_markup(response.body)
        if soup is None:
            return findings
        findings.extend(check_script_injection(scan_id, target_url, soup))
        findings.extend(check_forms(scan_id, target_url, soup))
        findings.extend(check_information_disclosure(scan_id, target_url, response.body))
        if runs_extended_checks(scan_type):
            findings.extend(check_extended(scan_id, target_url, soup, response.body))
        return findings

    def _fail(
        self,
        lifecycle: ScanLifecycle,
        scan_id: str,
        target_url: str,
        error: Exception,
    ) -> ScanOutcome:
        logger.warning("Scan %s of %s failed: %s", scan_id, target_url, error, exc_info=error)
        finding = build_scan_error(scan_id, target_url, error)
        self.store.create_vulnerability(finding)
        outcome = ScanOutcome.from_findings([finding])
        lifecycle.fail(outcome.counts)
        return outcome

    def start_scan(self, target_url: str, scan_type: str = "quick") -> "Scan":
        """Create a pending scan and run it in the background.

        Must be called from a running event loop. Returns the pending record
        immediately; use ``drain()`` to wait for background scans.
        """
        scan = self.store.create_scan(target_url, scan_type)
        self.spawn(scan.id, scan.target_url, scan.scan_type)
        return scan

    def spawn(self, scan_id: str, target_url: str, scan_type: str) -> asyncio.Task:
        task = asyncio.create_task(
            self.perform_scan(scan_id, target_url, scan_type), name=f"scan-{scan_id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Background %s ended with an error", task.get_name(), exc_info=error)

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every background scan has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
