"""
Configuration management for ZapScan.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.zapscan/.env)
3. Global config file (~/.zapscan/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    get_global_config_path,
    is_global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    get_config,
    get_scan_timeout,
    get_schedule_timezone,
    get_scheduler_interval,
    get_user_agent,
    get_verify_tls,
    is_verbose,
)
from .project_setup import (
    create_global_config,
    create_project_config_template,
    ensure_project_storage_dir,
    get_project_db_path,
    get_project_env_path,
    get_project_storage_dir,
    get_report_dir,
)

__all__ = [
    # env_loader
    "get_global_config_path",
    "is_global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_config",
    "get_scan_timeout",
    "get_schedule_timezone",
    "get_scheduler_interval",
    "get_user_agent",
    "get_verify_tls",
    "is_verbose",
    # project_setup
    "create_global_config",
    "create_project_config_template",
    "ensure_project_storage_dir",
    "get_project_db_path",
    "get_project_env_path",
    "get_project_storage_dir",
    "get_report_dir",
]
