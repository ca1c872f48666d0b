"""Transport protocol check."""

from urllib.parse import urlparse

from ..findings import FindingRule, build_finding
from ..models import Finding
from ..severity import Severity

INSECURE_PROTOCOL = FindingRule(
    type="Insecure Protocol",
    severity=Severity.HIGH,
    title="Website not using HTTPS",
    description=(
        "The website is not using HTTPS encryption. All data transmitted between the user and "
        "the server can be intercepted by attackers."
    ),
    remediation=(
        "Configure the server to use HTTPS with a valid SSL/TLS certificate. Redirect all HTTP "
        "traffic to HTTPS."
    ),
)


def is_https(target_url: str) -> bool:
    """True when the URL scheme is https, in any letter case."""
    return urlparse(target_url).scheme.lower() == "https"


def check_protocol(scan_id: str, target_url: str) -> list[Finding]:
    """Flag targets that are not served over HTTPS."""
    if is_https(target_url):
        return []
    scheme = urlparse(target_url).scheme.lower()
    return [build_finding(INSECURE_PROTOCOL, scan_id, target_url, {"protocol": f"{scheme}:"})]
