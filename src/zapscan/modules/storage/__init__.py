"""Persistence layer for scans, findings, schedules and settings."""

from .manager import StorageManager
from .protocol import ScanStore
from .settings_mixin import generate_api_key

__all__ = ["ScanStore", "StorageManager", "generate_api_key"]
