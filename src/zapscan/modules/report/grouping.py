"""Helpers for grouping vulnerabilities."""

from typing import Any

from zapscan.modules.scanner.severity import SEVERITY_ORDER


def group_by_severity(vulnerabilities: list[Any]) -> dict[str, list[Any]]:
    """Group vulnerabilities by severity, most severe first."""
    grouped = {severity.value: [] for severity in SEVERITY_ORDER}
    for vulnerability in vulnerabilities:
        severity = str(getattr(vulnerability, "severity", ""))
        if severity in grouped:
            grouped[severity].append(vulnerability)
    return grouped
