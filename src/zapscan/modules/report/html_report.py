"""Standalone HTML report rendering."""

from datetime import datetime
from html import escape
from pathlib import Path
from typing import Any

from zapscan.utils.timeutil import ensure_utc

from .grouping import group_by_severity
from .models import ReportConfig

_STYLE = """
    body { font-family: Arial, sans-serif; margin: 40px; background: #1a1a1a; color: #fff; }
    .header { border-bottom: 2px solid #14b8a6; padding-bottom: 20px; margin-bottom: 30px; }
    .summary { display: grid; grid-template-columns: repeat(5, 1fr); gap: 20px; }
    .stat { background: #2a2a2a; padding: 20px; border-radius: 8px; text-align: center; }
    .stat-value { font-size: 2em; font-weight: bold; color: #14b8a6; }
    .vuln { background: #2a2a2a; margin-bottom: 15px; padding: 20px; border-left: 4px solid; }
    .critical { border-color: #dc2626; }
    .high { border-color: #ea580c; }
    .medium { border-color: #eab308; }
    .low { border-color: #14b8a6; }
    h1, h2, h3 { color: #14b8a6; }
"""


def _text(value: Any, default: str = "N/A") -> str:
    if value is None or value == "":
        return default
    return escape(str(value))


def _timestamp(value: datetime | None) -> str:
    if value is None:
        return "N/A"
    return ensure_utc(value).strftime("%Y-%m-%d %H:%M:%S UTC")


def render_vulnerability_html(vulnerability: Any, config: ReportConfig | None = None) -> str:
    """Render one vulnerability as an HTML section."""
    config = config or ReportConfig(format="html")
    css = escape(str(vulnerability.severity).lower())
    remediation = ""
    if config.include_remediation:
        remediation = f"<p><strong>Remediation:</strong> {_text(vulnerability.remediation)}</p>"
    return f"""
    <div class="vuln {css}">
      <span class="severity {css}">{_text(vulnerability.severity)}</span>
      <h3>{_text(vulnerability.title)}</h3>
      <p><strong>Type:</strong> {_text(vulnerability.type)}</p>
      <p>{_text(vulnerability.description, "")}</p>
      <p><strong>Affected URL:</strong> {_text(vulnerability.affected_url)}</p>
      {remediation}
    </div>"""


def render_html_report(
    scan: Any, vulnerabilities: list[Any], config: ReportConfig | None = None
) -> str:
    """Render a standalone HTML report; every interpolated value is escaped."""
    grouped = group_by_severity(vulnerabilities)
    ordered = [vulnerability for group in grouped.values() for vulnerability in group]
    sections = "".join(render_vulnerability_html(v, config) for v in ordered)
    if not sections:
        sections = "<p>No vulnerabilities were found.</p>"
    stats = [
        ("Total", len(vulnerabilities)),
        ("Critical", scan.critical_count or 0),
        ("High", scan.high_count or 0),
        ("Medium", scan.medium_count or 0),
        ("Low", scan.low_count or 0),
    ]
    summary = "".join(
        f'<div class="stat"><div class="stat-value">{value}</div>{label}</div>'
        for label, value in stats
    )
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>ZAP Scan Report - {_text(scan.target_url)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="header">
    <h1>ZAP Vulnerability Scan Report</h1>
    <p>Target: {_text(scan.target_url)}</p>
    <p>Scan Type: {_text(scan.scan_type)}</p>
    <p>Status: {_text(scan.status)}</p>
    <p>Completed: {_timestamp(scan.completed_at)}</p>
  </div>
  <div class="summary">{summary}</div>
  <h2>Vulnerabilities</h2>
  {sections}
</body>
</html>
"""


def generate_html_report(
    report_path: Path,
    scan: Any,
    vulnerabilities: list[Any],
    config: ReportConfig,
) -> Path:
    """Write an HTML report file."""
    report_path.write_text(render_html_report(scan, vulnerabilities, config), encoding="utf-8")
    return report_path
