"""JSON report rendering."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from zapscan.utils.timeutil import ensure_utc

from .models import ReportConfig


def build_json_report(scan: Any, vulnerabilities: list[Any], generated_at: datetime) -> dict:
    """Build the export document for one scan.

    ``summary.total`` counts the attached vulnerabilities; the severity figures
    come from the scan's own counters.
    """
    return {
        "report": {
            "generatedAt": ensure_utc(generated_at).isoformat(),
            "scan": scan.to_dict(),
            "vulnerabilities": [vulnerability.to_dict() for vulnerability in vulnerabilities],
            "summary": {
                "total": len(vulnerabilities),
                "critical": scan.critical_count or 0,
                "high": scan.high_count or 0,
                "medium": scan.medium_count or 0,
                "low": scan.low_count or 0,
            },
        }
    }


def generate_json_report(
    report_path: Path,
    scan: Any,
    vulnerabilities: list[Any],
    config: ReportConfig,
    generated_at: datetime,
) -> Path:
    """Write a JSON report file."""
    data = build_json_report(scan, vulnerabilities, generated_at)
    if not config.include_remediation:
        for vulnerability in data["report"]["vulnerabilities"]:
            vulnerability["remediation"] = None
    report_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return report_path
