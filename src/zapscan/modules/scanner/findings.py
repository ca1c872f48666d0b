"""Detection rule descriptors and the finding builder."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .models import Finding
from .severity import Severity


@dataclass(frozen=True)
class FindingRule:
    """Static metadata shared by every finding a detection rule emits."""

    type: str
    severity: Severity
    title: str
    description: str
    remediation: str | None = None


def build_finding(
    rule: FindingRule,
    scan_id: str,
    target_url: str,
    details: Mapping[str, Any] | None = None,
    description: str | None = None,
) -> Finding:
    """Create a finding from a rule, the scanned URL and rule-specific details.

    The rule description is a ``str.format`` template filled from *details*
    unless an explicit *description* is given.
    """
    context = dict(details or {})
    return Finding(
        scan_id=scan_id,
        type=rule.type,
        severity=rule.severity,
        title=rule.title,
        description=description or rule.description.format(**context),
        affected_url=target_url,
        remediation=rule.remediation,
        details=context,
    )


SCAN_ERROR = FindingRule(
    type="Scan Error",
    severity=Severity.LOW,
    title="Unable to complete scan",
    description="The scan could not be completed: {error}",
    remediation="Verify the URL is accessible and try again.",
)


def build_scan_error(scan_id: str, target_url: str, error: BaseException | str) -> Finding:
    """Build the synthetic finding recorded when a scan fails."""
    message = str(error)
    if not message:
        message = type(error).__name__ if isinstance(error, BaseException) else "Unknown error"
    return build_finding(SCAN_ERROR, scan_id, target_url, {"error": message})
