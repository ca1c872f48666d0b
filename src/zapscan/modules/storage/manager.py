"""Main StorageManager class."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from zapscan.db.init import init_db

from .scan_mixin import ScanMixin
from .schedule_mixin import ScheduleMixin
from .settings_mixin import SettingsMixin
from .stats_mixin import StatsMixin
from .vulnerability_mixin import VulnerabilityMixin


class StorageManager(ScanMixin, VulnerabilityMixin, ScheduleMixin, SettingsMixin, StatsMixin):
    """Persists scans, findings, schedules and settings in SQLite."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        init_db(self.db_path)
        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.session = session_factory()

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()
