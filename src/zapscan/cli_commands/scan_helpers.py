"""Rendering helpers shared by scan-related CLI commands."""

from typing import Any

from rich.table import Table

from zapscan.modules.scanner.severity import SEVERITY_ORDER

from .shared import console, format_timestamp

SEVERITY_STYLES = {
    "Critical": "bold red",
    "High": "red",
    "Medium": "yellow",
    "Low": "cyan",
}

STATUS_STYLES = {
    "pending": "dim",
    "running": "blue",
    "completed": "green",
    "failed": "red",
}


def styled_status(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def severity_table(scan: Any) -> Table:
    """Per-severity counters of one scan."""
    table = Table(title="Severity Summary", show_lines=False)
    table.add_column("Severity")
    table.add_column("Count", justify="right")
    counts = {
        "Critical": scan.critical_count,
        "High": scan.high_count,
        "Medium": scan.medium_count,
        "Low": scan.low_count,
    }
    for severity in SEVERITY_ORDER:
        style = SEVERITY_STYLES[severity.value]
        table.add_row(f"[{style}]{severity.value}[/{style}]", str(counts[severity.value] or 0))
    table.add_row("[bold]Total[/bold]", str(scan.total_vulnerabilities or 0))
    return table


def findings_table(vulnerabilities: list[Any]) -> Table:
    """One row per vulnerability, most severe first."""
    rank = {severity.value: index for index, severity in enumerate(SEVERITY_ORDER)}
    table = Table(title="Findings")
    table.add_column("Severity")
    table.add_column("Type")
    table.add_column("Title")
    for vulnerability in sorted(vulnerabilities, key=lambda v: rank.get(v.severity, len(rank))):
        style = SEVERITY_STYLES.get(vulnerability.severity, "white")
        table.add_row(
            f"[{style}]{vulnerability.severity}[/{style}]",
            vulnerability.type,
            vulnerability.title,
        )
    return table


def print_scan_details(scan: Any, vulnerabilities: list[Any]) -> None:
    console.print(f"[bold]Scan {scan.id}[/bold]")
    console.print(f"  Target:    {scan.target_url}")
    console.print(f"  Type:      {scan.scan_type}")
    console.print(f"  Status:    {styled_status(scan.status)}")
    console.print(f"  Started:   {format_timestamp(scan.started_at)}")
    console.print(f"  Completed: {format_timestamp(scan.completed_at)}")
    console.print(severity_table(scan))
    if vulnerabilities:
        console.print(findings_table(vulnerabilities))
