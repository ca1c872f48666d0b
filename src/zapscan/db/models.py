"""Database models for ZapScan using SQLAlchemy."""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

from zapscan.utils.timeutil import ensure_utc, utc_now


def _new_id() -> str:
    return str(uuid.uuid4())


Base = declarative_base()


class Scan(Base):
    """A single scan of one target URL and its lifecycle state."""

    __tablename__ = "scans"

    id = Column(String(36), primary_key=True, default=_new_id)
    target_url = Column(Text, nullable=False)
    scan_type = Column(String, nullable=False, default="quick")  # quick, deep, full
    # pending, running, completed, failed
    status = Column(String, nullable=False, default="pending")
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    total_vulnerabilities = Column(Integer, nullable=False, default=0)
    critical_count = Column(Integer, nullable=False, default=0)
    high_count = Column(Integer, nullable=False, default=0)
    medium_count = Column(Integer, nullable=False, default=0)
    low_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utc_now)

    vulnerabilities = relationship(
        "Vulnerability", back_populates="scan", cascade="all, delete-orphan"
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "targetUrl": self.target_url,
            "scanType": self.scan_type,
            "status": self.status,
            "startedAt": _isoformat(self.started_at),
            "completedAt": _isoformat(self.completed_at),
            "totalVulnerabilities": self.total_vulnerabilities,
            "criticalCount": self.critical_count,
            "highCount": self.high_count,
            "mediumCount": self.medium_count,
            "lowCount": self.low_count,
        }


class Vulnerability(Base):
    """A persisted finding owned by one scan."""

    __tablename__ = "vulnerabilities"

    id = Column(String(36), primary_key=True, default=_new_id)
    scan_id = Column(String(36), ForeignKey("scans.id"), nullable=False, index=True)

    type = Column(String, nullable=False)
    severity = Column(String, nullable=False)  # Critical, High, Medium, Low
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    affected_url = Column(Text, nullable=False)
    remediation = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)

    scan = relationship("Scan", back_populates="vulnerabilities")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "scanId": self.scan_id,
            "type": self.type,
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "affectedUrl": self.affected_url,
            "remediation": self.remediation,
            "details": self.details,
        }


class ScheduledScan(Base):
    """A recurring quick scan of one target."""

    __tablename__ = "scheduled_scans"

    id = Column(String(36), primary_key=True, default=_new_id)
    target_url = Column(Text, nullable=False)
    frequency = Column(String, nullable=False)  # daily, weekly, monthly, quarterly, annually
    time = Column(String(5), nullable=False)  # HH:MM, local wall clock
    enabled = Column(Boolean, nullable=False, default=True)
    last_run = Column(DateTime(timezone=True), nullable=True)
    next_run = Column(DateTime(timezone=True), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "targetUrl": self.target_url,
            "frequency": self.frequency,
            "time": self.time,
            "enabled": self.enabled,
            "lastRun": _isoformat(self.last_run),
            "nextRun": _isoformat(self.next_run),
        }


class Settings(Base):
    """Single-row application settings."""

    __tablename__ = "settings"

    id = Column(String(36), primary_key=True, default=_new_id)
    scan_depth = Column(String, default="medium")
    auto_scan = Column(Boolean, default=False)
    email_notifications = Column(Boolean, default=True)
    api_key = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def to_dict(self) -> dict:
        return {
            "scanDepth": self.scan_depth,
            "autoScan": self.auto_scan,
            "emailNotifications": self.email_notifications,
            "apiKey": self.api_key,
            "updatedAt": _isoformat(self.updated_at),
        }


def _isoformat(value: datetime | None) -> str | None:
    return ensure_utc(value).isoformat() if value is not None else None
