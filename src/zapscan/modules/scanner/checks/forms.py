"""Form security checks."""

from bs4 import BeautifulSoup, Tag

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity
from .protocol import is_https

CSRF_FIELD_HINTS = ("csrf", "token", "_token")
SENSITIVE_NAME_HINTS = ("credit", "card", "ssn")
SAFE_AUTOCOMPLETE_VALUES = ("off", "new-password")

MISSING_CSRF_TOKEN = FindingRule(
    type="CSRF",
    severity=Severity.HIGH,
    title="Form Without CSRF Protection",
    description=(
        "A POST form was found without an apparent CSRF token. This may allow attackers to "
        "submit malicious requests on behalf of authenticated users."
    ),
    remediation=(
        "Implement CSRF tokens for all forms that modify data. Use a secure, random token that "
        "is validated on the server."
    ),
)

PASSWORD_OVER_HTTP = FindingRule(
    type="Insecure Transport",
    severity=Severity.CRITICAL,
    title="Password Field Over HTTP",
    description=(
        "A password input field is present on a page served over unencrypted HTTP. Passwords "
        "will be transmitted in plain text."
    ),
    remediation="Serve all pages with password fields over HTTPS only.",
)

SENSITIVE_AUTOCOMPLETE = FindingRule(
    type="Sensitive Data",
    severity=Severity.LOW,
    title="Autocomplete Enabled on Sensitive Field",
    description=(
        "A sensitive input field has autocomplete enabled. This may allow data to be stored in "
        "the browser."
    ),
    remediation=(
        "Set autocomplete='off' or autocomplete='new-password' on sensitive input fields."
    ),
)


def _is_password(field: Tag) -> bool:
    return str(field.get("type") or "").lower() == "password"


def _is_sensitive(field: Tag) -> bool:
    name = str(field.get("name") or "")
    return _is_password(field) or any(hint in name for hint in SENSITIVE_NAME_HINTS)


def _has_csrf_token(inputs: list[Tag]) -> bool:
    for field in inputs:
        name = str(field.get("name") or "")
        if any(hint in name for hint in CSRF_FIELD_HINTS):
            return True
    return False


def check_form(scan_id: str, target_url: str, form: Tag) -> list[Finding]:
    """Check a single form for CSRF, transport and autocomplete issues."""
    findings: list[Finding] = []
    action = form.get("action") or target_url
    method = str(form.get("method") or "GET").upper()
    inputs = form.find_all("input")

    if method == "POST" and not _has_csrf_token(inputs):
        findings.append(
            build_finding(
                MISSING_CSRF_TOKEN,
                scan_id,
                target_url,
                {"formAction": action, "method": method},
            )
        )

    # Fires independently of the protocol check.
    if any(_is_password(field) for field in inputs) and not is_https(target_url):
        findings.append(
            build_finding(PASSWORD_OVER_HTTP, scan_id, target_url, {"formAction": action})
        )

    for field in inputs:
        if not _is_sensitive(field):
            continue
        if field.get("autocomplete") in SAFE_AUTOCOMPLETE_VALUES:
            continue
        findings.append(
            build_finding(
                SENSITIVE_AUTOCOMPLETE,
                scan_id,
                target_url,
                {"inputName": field.get("name") or "unknown"},
            )
        )

    return findings


def check_forms(scan_id: str, target_url: str, soup: BeautifulSoup) -> list[Finding]:
    """Check every form in the document independently."""
    findings: list[Finding] = []
    for form in soup.find_all("form"):
        findings.extend(check_form(scan_id, target_url, form))
    return findings
