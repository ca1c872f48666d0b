"""Application settings operations for StorageManager."""

import secrets
import string
from typing import Any

from .db_models import Settings

API_KEY_PREFIX = "zap_sk_"
API_KEY_LENGTH = 16
_API_KEY_ALPHABET = string.ascii_lowercase + string.digits
_UPDATABLE_FIELDS = frozenset({"scan_depth", "auto_scan", "email_notifications"})


def generate_api_key() -> str:
    """Return a fresh API key of the form ``zap_sk_<16 lowercase alphanumerics>``."""
    suffix = "".join(secrets.choice(_API_KEY_ALPHABET) for _ in range(API_KEY_LENGTH))
    return f"{API_KEY_PREFIX}{suffix}"


class SettingsMixin:
    """Provide access to the single settings row."""

    def get_settings(self) -> Settings:
        """Get the settings row, creating it with defaults on first use."""
        settings = self.session.query(Settings).first()
        if settings is None:
            settings = Settings(api_key=generate_api_key())
            self.session.add(settings)
            self.session.commit()
        return settings

    def update_settings(self, **changes: Any) -> Settings:
        """Apply a partial update to the settings row."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        settings = self.get_settings()
        for name, value in changes.items():
            setattr(settings, name, value)
        self.session.commit()
        return settings

    def regenerate_api_key(self) -> str:
        settings = self.get_settings()
        settings.api_key = generate_api_key()
        self.session.commit()
        return settings.api_key
