"""Report export and dashboard summaries."""

from .generator import ReportGenerator
from .html_report import render_html_report
from .json_report import build_json_report
from .models import REPORT_FORMATS, ReportConfig
from .summary import describe_last_scan, weekly_activity

__all__ = [
    "REPORT_FORMATS",
    "ReportConfig",
    "ReportGenerator",
    "build_json_report",
    "describe_last_scan",
    "render_html_report",
    "weekly_activity",
]
