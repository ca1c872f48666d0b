"""Configuration getter functions."""

import os
from datetime import tzinfo
from pathlib import Path
from typing import Any

from zapscan.modules.scheduler.timing import load_zone
from zapscan.tools.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

from .env_loader import load_global_config, load_project_config

DEFAULT_SCHEDULER_INTERVAL = 30.0
_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _as_float(key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be a number, got {value!r}") from exc
    if number <= 0:
        raise ValueError(f"{key} must be positive, got {value!r}")
    return number


def get_scan_timeout(project_dir: Path | None = None) -> float:
    """Get the fetch timeout in seconds (default: 30)."""
    value = get_config("ZAPSCAN_SCAN_TIMEOUT", project_dir, default=DEFAULT_TIMEOUT)
    return _as_float("ZAPSCAN_SCAN_TIMEOUT", value)


def get_user_agent(project_dir: Path | None = None) -> str:
    """Get the user agent sent with the fetch."""
    return str(get_config("ZAPSCAN_USER_AGENT", project_dir, default=DEFAULT_USER_AGENT))


def get_verify_tls(project_dir: Path | None = None) -> bool:
    """Whether certificates are verified on fetch (default: no)."""
    return _as_bool(get_config("ZAPSCAN_VERIFY_TLS", project_dir, default=False))


def get_scheduler_interval(project_dir: Path | None = None) -> float:
    """Get the seconds between scheduler ticks (default: 30)."""
    value = get_config(
        "ZAPSCAN_SCHEDULER_INTERVAL", project_dir, default=DEFAULT_SCHEDULER_INTERVAL
    )
    return _as_float("ZAPSCAN_SCHEDULER_INTERVAL", value)


def is_verbose(project_dir: Path | None = None) -> bool:
    return _as_bool(get_config("ZAPSCAN_VERBOSE", project_dir, default=False))


def get_schedule_timezone(project_dir: Path | None = None) -> tzinfo | None:
    """Get the IANA zone schedule times are read in, or None for the host zone."""
    value = get_config("ZAPSCAN_TIMEZONE", project_dir)
    if not value:
        return None
    return load_zone(str(value))
