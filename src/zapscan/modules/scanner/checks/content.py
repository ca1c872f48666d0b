"""Information disclosure checks on the raw response body."""

import re

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity

COMMENT_PATTERN = re.compile(r"<!--(.*?)-->", re.DOTALL)
SENSITIVE_COMMENT_PATTERN = re.compile(
    r"password|secret|api[ _-]?key|token|credential|todo|fixme|hack|bug",
    re.IGNORECASE,
)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
EMAIL_THRESHOLD = 3

# Checked in order; the first match wins.
ERROR_SIGNATURES = (
    re.compile(r"fatal error", re.IGNORECASE),
    re.compile(r"stack trace", re.IGNORECASE),
    re.compile(r"exception in", re.IGNORECASE),
    re.compile(r"syntax error", re.IGNORECASE),
    re.compile(r"undefined index", re.IGNORECASE),
    re.compile(r"mysql_", re.IGNORECASE),
    re.compile(r"mysqli_", re.IGNORECASE),
    re.compile(r"pg_query", re.IGNORECASE),
)

SENSITIVE_COMMENTS = FindingRule(
    type="Information Disclosure",
    severity=Severity.MEDIUM,
    title="Sensitive Information in HTML Comments",
    description=(
        "Found {count} HTML comments that may contain sensitive information or development "
        "notes."
    ),
    remediation=(
        "Remove all comments containing sensitive information or development notes from "
        "production code."
    ),
)

EXPOSED_EMAILS = FindingRule(
    type="Information Disclosure",
    severity=Severity.LOW,
    title="Multiple Email Addresses Exposed",
    description=(
        "Found {count} email addresses in the page source. These may be harvested for spam or "
        "phishing attacks."
    ),
    remediation="Consider obfuscating email addresses or using contact forms instead.",
)

ERROR_DISCLOSURE = FindingRule(
    type="Information Disclosure",
    severity=Severity.HIGH,
    title="Error Message Disclosure",
    description=(
        "The page contains error messages that may reveal sensitive information about the "
        "application or database."
    ),
    remediation=(
        "Configure the application to hide detailed error messages in production. Log errors "
        "securely on the server."
    ),
)


def count_sensitive_comments(html: str) -> int:
    """Count HTML comments that mention secrets or development notes."""
    return sum(
        1 for comment in COMMENT_PATTERN.findall(html) if SENSITIVE_COMMENT_PATTERN.search(comment)
    )


def find_error_signature(html: str) -> re.Pattern | None:
    """Return the first error signature present in the body."""
    for pattern in ERROR_SIGNATURES:
        if pattern.search(html):
            return pattern
    return None


def check_information_disclosure(scan_id: str, target_url: str, html: str) -> list[Finding]:
    """Report leaky comments, harvestable emails and verbose error output."""
    findings: list[Finding] = []

    comments = count_sensitive_comments(html)
    if comments:
        findings.append(
            build_finding(SENSITIVE_COMMENTS, scan_id, target_url, {"count": comments})
        )

    emails = EMAIL_PATTERN.findall(html)
    if len(emails) > EMAIL_THRESHOLD:
        findings.append(build_finding(EXPOSED_EMAILS, scan_id, target_url, {"count": len(emails)}))

    signature = find_error_signature(html)
    if signature is not None:
        findings.append(
            build_finding(ERROR_DISCLOSURE, scan_id, target_url, {"pattern": signature.pattern})
        )

    return findings
