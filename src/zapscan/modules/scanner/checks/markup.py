"""Markup checks for script injection surfaces."""

from bs4 import BeautifulSoup, Tag

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity

INLINE_EVENT_ATTRIBUTES = ("onclick", "onerror", "onload", "onmouseover", "onfocus", "onblur")

INLINE_EVENT_HANDLERS = FindingRule(
    type="Potential XSS",
    severity=Severity.MEDIUM,
    title="Inline JavaScript Event Handlers Detected",
    description=(
        "Found {count} elements with inline JavaScript event handlers. These can be exploited "
        "for XSS attacks if user input is reflected."
    ),
    remediation=(
        "Use addEventListener() instead of inline event handlers. Ensure all user input is "
        "properly sanitized."
    ),
)

JAVASCRIPT_URLS = FindingRule(
    type="Potential XSS",
    severity=Severity.HIGH,
    title="JavaScript URL Scheme Detected",
    description=(
        "Found {count} links using the javascript: URL scheme. This can be exploited for XSS "
        "attacks."
    ),
    remediation="Remove javascript: URLs and use proper event handling instead.",
)

INLINE_SCRIPTS_WITHOUT_NONCE = FindingRule(
    type="Potential XSS",
    severity=Severity.LOW,
    title="Inline Scripts Without Nonce",
    description=(
        "Found {count} inline scripts without CSP nonces. This may indicate weak XSS protection."
    ),
    remediation="Use CSP with nonces for inline scripts or move scripts to external files.",
)


def _has_inline_handler(tag: Tag) -> bool:
    return any(attribute in tag.attrs for attribute in INLINE_EVENT_ATTRIBUTES)


def check_script_injection(scan_id: str, target_url: str, soup: BeautifulSoup) -> list[Finding]:
    """Report inline handlers, javascript: links and inline scripts lacking nonces."""
    findings: list[Finding] = []

    handlers = soup.find_all(_has_inline_handler)
    if handlers:
        findings.append(
            build_finding(INLINE_EVENT_HANDLERS, scan_id, target_url, {"count": len(handlers)})
        )

    js_links = [
        link for link in soup.find_all("a", href=True) if link["href"].startswith("javascript:")
    ]
    if js_links:
        findings.append(
            build_finding(JAVASCRIPT_URLS, scan_id, target_url, {"count": len(js_links)})
        )

    # One nonce anywhere suppresses the finding for the whole page.
    inline_scripts = soup.find_all("script", src=False)
    if inline_scripts and not any(script.get("nonce") for script in inline_scripts):
        findings.append(
            build_finding(
                INLINE_SCRIPTS_WITHOUT_NONCE, scan_id, target_url, {"count": len(inline_scripts)}
            )
        )

    return findings
