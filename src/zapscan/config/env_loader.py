"""Environment variable and configuration file loading."""

from pathlib import Path
from typing import Any

import yaml

GLOBAL_CONFIG_DIRNAME = ".zapscan"


def get_global_config_dir() -> Path:
    return Path.home() / GLOBAL_CONFIG_DIRNAME


def get_global_config_path() -> Path:
    return get_global_config_dir() / "config.yml"


def is_global_config_dir(path: Path) -> bool:
    """Return True if the path is the global ~/.zapscan config directory."""
    home_config = get_global_config_dir()
    try:
        return path.resolve() == home_config.resolve()
    except FileNotFoundError:
        return path == home_config


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load KEY=VALUE pairs from a .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    env_vars[key.strip()] = value.strip().strip("\"'")
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.zapscan/config.yml."""
    config_path = get_global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .zapscan/.env."""
    if project_dir is None:
        from zapscan.cli_commands.shared import get_project_dir

        project_dir = get_project_dir()

    if project_dir:
        from zapscan.config.project_setup import get_project_env_path

        env_path = get_project_env_path(project_dir)
        if env_path:
            return load_env_file(env_path)

    return {}
