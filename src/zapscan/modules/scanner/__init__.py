"""Single-page passive scanner and scan lifecycle."""

from .findings import FindingRule, build_finding, build_scan_error
from .lifecycle import LifecycleError, ScanLifecycle, ScanNotFoundError, ScanStatus
from .main import InvalidTargetError, ScanOrchestrator, parse_target_url
from .models import SCAN_TYPES, Finding, ScanOutcome, normalize_scan_type
from .severity import Severity, SeverityCounts

__all__ = [
    "SCAN_TYPES",
    "Finding",
    "FindingRule",
    "InvalidTargetError",
    "LifecycleError",
    "ScanLifecycle",
    "ScanNotFoundError",
    "ScanOrchestrator",
    "ScanOutcome",
    "ScanStatus",
    "Severity",
    "SeverityCounts",
    "build_finding",
    "build_scan_error",
    "normalize_scan_type",
    "parse_target_url",
]
