"""Report export orchestration."""

from pathlib import Path

from zapscan.modules.storage import StorageManager
from zapscan.utils.timeutil import utc_now

from .html_report import generate_html_report
from .json_report import generate_json_report
from .models import REPORT_FORMATS, ReportConfig


class ReportGenerator:
    """Exports scan reports into the project's report directory."""

    def __init__(self, store: StorageManager, report_dir: Path):
        self.store = store
        self.report_dir = report_dir

    def export(self, scan_id: str, config: ReportConfig | None = None) -> Path:
        """Write a report for one scan and return its path."""
        config = config or ReportConfig()
        report_format = config.format.lower()
        if report_format not in REPORT_FORMATS:
            raise ValueError(f"Unsupported format: {config.format}")

        scan = self.store.get_scan(scan_id)
        if scan is None:
            raise ValueError(f"Scan not found: {scan_id}")
        vulnerabilities = self.store.get_vulnerabilities_by_scan(scan_id)

        generated_at = utc_now()
        self.report_dir.mkdir(parents=True, exist_ok=True)
        stamp = generated_at.strftime("%Y%m%d_%H%M%S")
        report_path = self.report_dir / f"zapscan_report_{scan.id[:8]}_{stamp}.{report_format}"

        if report_format == "json":
            return generate_json_report(report_path, scan, vulnerabilities, config, generated_at)
        return generate_html_report(report_path, scan, vulnerabilities, config)
