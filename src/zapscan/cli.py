"""ZapScan CLI facade.

Command modules look up these names at call time (see ``cli_commands.deps``),
so tests can monkeypatch them here.
"""

from zapscan.cli_commands import (  # noqa: F401
    config_command,
    project_init,
    report_command,
    scan_command,
    scans_command,
    schedule_command,
    settings_command,
)
from zapscan.cli_commands.shared import app, console, get_project_dir, require_project
from zapscan.config import (
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    get_global_config_path,
    get_project_db_path,
    get_project_env_path,
    get_report_dir,
    get_scan_timeout,
    get_schedule_timezone,
    get_scheduler_interval,
    get_user_agent,
    get_verify_tls,
    load_global_config,
    load_project_config,
)
from zapscan.modules.report import ReportGenerator
from zapscan.modules.scanner import ScanOrchestrator
from zapscan.modules.scheduler import ScanScheduler
from zapscan.modules.storage import StorageManager

__all__ = [
    "ReportGenerator",
    "ScanOrchestrator",
    "ScanScheduler",
    "StorageManager",
    "app",
    "console",
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "get_global_config_path",
    "get_project_db_path",
    "get_project_env_path",
    "get_report_dir",
    "get_project_dir",
    "get_scan_timeout",
    "get_schedule_timezone",
    "get_scheduler_interval",
    "get_user_agent",
    "get_verify_tls",
    "load_global_config",
    "load_project_config",
    "main",
    "require_project",
]


def main() -> None:
    """Entry point for the CLI."""
    app()
