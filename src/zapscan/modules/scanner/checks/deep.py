"""Extended checks enabled for deep and full scans."""

import re

from bs4 import BeautifulSoup

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity
from .protocol import is_https

JQUERY_VERSION_PATTERN = re.compile(r"jquery[.-]?(\d+\.\d+\.\d+)", re.IGNORECASE)
JQUERY_MINIMUM = (3, 5)
REDIRECT_HINTS = ("redirect", "url=", "goto=", "next=")
# (tag, attribute) pairs that load subresources.
SUBRESOURCE_ATTRIBUTES = (("script", "src"), ("link", "href"), ("img", "src"))

MIXED_CONTENT = FindingRule(
    type="Mixed Content",
    severity=Severity.MEDIUM,
    title="Mixed Content Detected",
    description=(
        "Found {count} resources loaded over HTTP on an HTTPS page. This can compromise "
        "security."
    ),
    remediation="Load all resources over HTTPS or use protocol-relative URLs.",
)

OUTDATED_JQUERY = FindingRule(
    type="Outdated Library",
    severity=Severity.MEDIUM,
    title="Outdated jQuery Version",
    description=(
        "jQuery version {version} detected. Older versions may contain known security "
        "vulnerabilities."
    ),
    remediation="Update jQuery to the latest stable version (3.7.x or newer).",
)

OPEN_REDIRECT = FindingRule(
    type="Open Redirect",
    severity=Severity.MEDIUM,
    title="Potential Open Redirect",
    description=(
        "Found {count} links with redirect parameters. These may be exploitable for phishing "
        "attacks."
    ),
    remediation=(
        "Validate and whitelist all redirect destinations. Avoid using user-controlled input "
        "for redirects."
    ),
)

META_REFRESH = FindingRule(
    type="Information",
    severity=Severity.LOW,
    title="Meta Refresh Tag Detected",
    description=(
        "A meta refresh tag is present which may be used for redirects. Ensure it doesn't "
        "redirect to untrusted destinations."
    ),
    remediation="Use server-side redirects instead of meta refresh tags.",
)


def count_insecure_subresources(soup: BeautifulSoup) -> int:
    """Count script, stylesheet and image references loaded over plain HTTP."""
    total = 0
    for tag_name, attribute in SUBRESOURCE_ATTRIBUTES:
        for tag in soup.find_all(tag_name):
            value = tag.get(attribute)
            if isinstance(value, str) and value.startswith("http:"):
                total += 1
    return total


def detect_jquery_version(html: str) -> tuple[str, tuple[int, ...]] | None:
    """Return the first jQuery version string in the body and its numeric parts."""
    match = JQUERY_VERSION_PATTERN.search(html)
    if not match:
        return None
    version = match.group(1)
    return version, tuple(int(part) for part in version.split("."))


def is_outdated_jquery(parts: tuple[int, ...]) -> bool:
    major, minor = parts[0], parts[1]
    return major < JQUERY_MINIMUM[0] or (major == JQUERY_MINIMUM[0] and minor < JQUERY_MINIMUM[1])


def check_extended(
    scan_id: str,
    target_url: str,
    soup: BeautifulSoup,
    html: str,
) -> list[Finding]:
    """Run mixed content, library, redirect and meta refresh checks."""
    findings: list[Finding] = []

    if is_https(target_url):
        insecure = count_insecure_subresources(soup)
        if insecure:
            findings.append(build_finding(MIXED_CONTENT, scan_id, target_url, {"count": insecure}))

    jquery = detect_jquery_version(html)
    if jquery is not None:
        version, parts = jquery
        if is_outdated_jquery(parts):
            findings.append(
                build_finding(OUTDATED_JQUERY, scan_id, target_url, {"version": version})
            )

    redirects = [
        link
        for link in soup.find_all("a", href=True)
        if any(hint in link["href"] for hint in REDIRECT_HINTS)
    ]
    if redirects:
        findings.append(
            build_finding(OPEN_REDIRECT, scan_id, target_url, {"count": len(redirects)})
        )

    refresh = soup.find(
        "meta", attrs={"http-equiv": lambda value: bool(value) and value.lower() == "refresh"}
    )
    if refresh is not None:
        findings.append(
            build_finding(META_REFRESH, scan_id, target_url, {"content": refresh.get("content")})
        )

    return findings
