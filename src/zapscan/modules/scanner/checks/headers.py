"""Response header checks."""

from collections.abc import Mapping

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity

MISSING_HEADER_RULES: tuple[tuple[str, FindingRule], ...] = (
    (
        "X-Frame-Options",
        FindingRule(
            type="Missing Security Header",
            severity=Severity.MEDIUM,
            title="Missing X-Frame-Options Header",
            description=(
                "The X-Frame-Options header is not set. This can lead to clickjacking attacks "
                "where an attacker can embed your site in an iframe."
            ),
            remediation=(
                "Add the X-Frame-Options header with value 'DENY' or 'SAMEORIGIN' to prevent "
                "clickjacking."
            ),
        ),
    ),
    (
        "Content-Security-Policy",
        FindingRule(
            type="Missing Security Header",
            severity=Severity.MEDIUM,
            title="Missing Content-Security-Policy Header",
            description=(
                "The Content-Security-Policy header is not set. CSP helps prevent XSS attacks "
                "by controlling which resources can be loaded."
            ),
            remediation=(
                "Implement a Content-Security-Policy header that restricts resource loading "
                "to trusted sources."
            ),
        ),
    ),
    (
        "X-Content-Type-Options",
        FindingRule(
            type="Missing Security Header",
            severity=Severity.LOW,
            title="Missing X-Content-Type-Options Header",
            description=(
                "The X-Content-Type-Options header is not set. This can lead to MIME type "
                "sniffing attacks."
            ),
            remediation="Add the X-Content-Type-Options header with value 'nosniff'.",
        ),
    ),
    (
        "Strict-Transport-Security",
        FindingRule(
            type="Missing Security Header",
            severity=Severity.MEDIUM,
            title="Missing Strict-Transport-Security Header",
            description=(
                "The HSTS header is not set. This allows attackers to downgrade connections "
                "from HTTPS to HTTP."
            ),
            remediation="Add the Strict-Transport-Security header with appropriate max-age value.",
        ),
    ),
    (
        "X-XSS-Protection",
        FindingRule(
            type="Missing Security Header",
            severity=Severity.LOW,
            title="Missing X-XSS-Protection Header",
            description=(
                "The X-XSS-Protection header is not set. Modern browsers have built-in XSS "
                "filtering, but this header provides additional protection."
            ),
            remediation="Add the X-XSS-Protection header with value '1; mode=block'.",
        ),
    ),
)

SERVER_DISCLOSURE = FindingRule(
    type="Information Disclosure",
    severity=Severity.LOW,
    title="Server Version Disclosure",
    description=(
        "The server is disclosing its version information: {serverHeader}. This information "
        "can help attackers identify known vulnerabilities."
    ),
    remediation="Configure the server to hide or obfuscate the Server header.",
)


def normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Lower-case header names for case-insensitive lookup."""
    return {str(name).lower(): value for name, value in headers.items()}


def check_security_headers(
    scan_id: str,
    target_url: str,
    headers: Mapping[str, str],
) -> list[Finding]:
    """Report each missing security header and a disclosed Server header."""
    lowered = normalize_headers(headers)
    findings: list[Finding] = []

    for header, rule in MISSING_HEADER_RULES:
        if not lowered.get(header.lower()):
            findings.append(build_finding(rule, scan_id, target_url, {"header": header}))

    server = lowered.get("server", "")
    if server.strip():
        findings.append(
            build_finding(SERVER_DISCLOSURE, scan_id, target_url, {"serverHeader": server})
        )

    return findings
