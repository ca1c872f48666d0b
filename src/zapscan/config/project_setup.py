"""Project storage directory and environment setup."""

import hashlib
import logging
import os
import re
from pathlib import Path

import yaml

from zapscan.tools.http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

from .env_loader import get_global_config_dir, get_global_config_path, is_global_config_dir

logger = logging.getLogger(__name__)

STORAGE_DIRNAME = ".zapscan"
DB_FILENAME = "zapscan.db"
REPORT_DIRNAME = "report"

ENV_TEMPLATE = """# ZapScan project configuration
# Uncomment and adjust values; environment variables take precedence.

# Timeout of the single page fetch, in seconds
# ZAPSCAN_SCAN_TIMEOUT=30

# User agent sent with the fetch
# ZAPSCAN_USER_AGENT=ZAP-Scanner/1.0

# Verify TLS certificates of scanned targets
# ZAPSCAN_VERIFY_TLS=false

# IANA zone for schedule times (default: host zone)
# ZAPSCAN_TIMEZONE=Europe/Berlin

# Seconds between scheduler ticks for `zapscan schedule run`
# ZAPSCAN_SCHEDULER_INTERVAL=30

# Enable debug logging
# ZAPSCAN_VERBOSE=1
"""


def _storage_name(project_dir: Path) -> str:
    slug = re.sub(r"[^a-zA-Z0-9_-]+", "-", project_dir.name).strip("-") or "project"
    digest = hashlib.sha1(str(project_dir).encode()).hexdigest()[:8]
    return f"{slug}-{digest}"


def get_project_storage_dir(project_dir: Path | None) -> Path | None:
    """Resolve the storage directory for a project (.zapscan or data dir)."""
    if project_dir is None:
        return None

    marker = project_dir / STORAGE_DIRNAME
    if marker.is_file():
        try:
            target = marker.read_text().strip()
        except (PermissionError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not read project storage path from marker %s: %s", marker, e)
            return None
        return Path(target) if target else None

    if marker.is_dir():
        # ~/.zapscan holds global config; it is a project only when it has a database.
        if is_global_config_dir(marker) and not (marker / DB_FILENAME).exists():
            return None
        return marker

    data_root = os.environ.get("ZAPSCAN_DATA_DIR")
    if data_root:
        return Path(data_root) / _storage_name(project_dir)

    return marker


def ensure_project_storage_dir(project_dir: Path) -> Path:
    """Ensure the project storage directory exists and return it."""
    marker = project_dir / STORAGE_DIRNAME
    if marker.is_dir():
        return marker

    if marker.is_file():
        target = marker.read_text().strip()
        if not target:
            raise ValueError("Project marker file is empty.")
        storage = Path(target)
        storage.mkdir(parents=True, exist_ok=True)
        return storage

    storage = get_project_storage_dir(project_dir)
    if storage is None:
        raise ValueError("Unable to resolve project storage directory.")

    storage.mkdir(parents=True, exist_ok=True)

    # A data dir outside the project is referenced by a marker file.
    if storage != marker:
        marker.write_text(str(storage))

    return storage


def get_project_db_path(project_dir: Path | None) -> Path | None:
    """Get the project database path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / DB_FILENAME


def get_project_env_path(project_dir: Path | None) -> Path | None:
    """Get the project .env path."""
    storage = get_project_storage_dir(project_dir)
    if storage is None:
        return None
    return storage / ".env"


def get_report_dir(project_dir: Path) -> Path:
    return project_dir / REPORT_DIRNAME


def create_project_config_template(project_dir: Path) -> Path:
    """Create a .env template in the project storage directory."""
    env_path = ensure_project_storage_dir(project_dir) / ".env"
    if not env_path.exists():
        env_path.write_text(ENV_TEMPLATE)
    return env_path


def create_global_config() -> Path:
    """Create global config directory and file if they don't exist."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(exist_ok=True)

    config_path = get_global_config_path()
    if not config_path.exists():
        default_config = {
            "ZAPSCAN_SCAN_TIMEOUT": DEFAULT_TIMEOUT,
            "ZAPSCAN_USER_AGENT": DEFAULT_USER_AGENT,
            "ZAPSCAN_VERIFY_TLS": False,
            "ZAPSCAN_SCHEDULER_INTERVAL": 30,
        }
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)

    return config_path
