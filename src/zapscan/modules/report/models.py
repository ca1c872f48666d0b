"""Report data models."""

from dataclasses import dataclass

REPORT_FORMATS = ("json", "html")


@dataclass
class ReportConfig:
    """Configuration for report export."""

    format: str = "json"
    include_remediation: bool = True
