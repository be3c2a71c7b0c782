"""
SQLAlchemy models for Roadfix Connect
Reports, crowd confirmations and per-user contribution statistics
"""

from datetime import datetime, timezone
import uuid
import enum

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey,
    Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship

from roadfix.core.constants import (
    CONFIRMATION_UNIQUE_CONSTRAINT,
    FIELD_VALUE_LENGTH,
    IMAGE_URL_LENGTH,
    ISSUE_TYPE_LENGTH,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    REPORT_ID_LENGTH,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
    STATUS_RESOLVED,
    USER_ID_LENGTH,
)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_report_id() -> str:
    return str(uuid.uuid4())


class ReportPriority(str, enum.Enum):
    """Report priority levels."""
    LOW = PRIORITY_LOW
    MEDIUM = PRIORITY_MEDIUM
    HIGH = PRIORITY_HIGH


class ReportStatus(str, enum.Enum):
    """Report workflow status."""
    PENDING = STATUS_PENDING
    IN_PROGRESS = STATUS_IN_PROGRESS
    RESOLVED = STATUS_RESOLVED


class Report(Base):
    """
    Road hazard report submitted by a citizen.

    Priority and status are plain strings so rows written by other tools
    with values outside the known enums still load.
    """
    __tablename__ = "reports"

    id = Column(String(REPORT_ID_LENGTH), primary_key=True, default=new_report_id)

    # Report details
    issue_type = Column(String(ISSUE_TYPE_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(IMAGE_URL_LENGTH))

    # Classification
    priority = Column(String(FIELD_VALUE_LENGTH), nullable=False, default=ReportPriority.LOW.value)
    status = Column(String(FIELD_VALUE_LENGTH), nullable=False, default=ReportStatus.PENDING.value)

    # Owner
    user_id = Column(String(USER_ID_LENGTH), nullable=False, index=True)

    # Crowd confirmation
    confirmation_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    confirmations = relationship(
        "ReportConfirmation",
        back_populates="report",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("confirmation_count >= 0", name="ck_report_confirmation_count"),
        Index("idx_report_created_at", created_at),
    )

    def __repr__(self):
        return f"<Report({self.id}, type={self.issue_type}, confirmations={self.confirmation_count})>"


class ReportConfirmation(Base):
    """
    A user's corroboration of a report made by someone else.

    The (report_id, user_id) pair is unique.
    """
    __tablename__ = "report_confirmations"

    id = Column(Integer, primary_key=True, autoincrement=True)

    report_id = Column(
        String(REPORT_ID_LENGTH),
        ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(String(USER_ID_LENGTH), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    report = relationship("Report", back_populates="confirmations")

    __table_args__ = (
        UniqueConstraint("report_id", "user_id", name=CONFIRMATION_UNIQUE_CONSTRAINT),
        Index("idx_confirmation_user", user_id),
    )

    def __repr__(self):
        return f"<ReportConfirmation(report={self.report_id}, user={self.user_id})>"


class UserStats(Base):
    """
    Per-user contribution score.

    Created on the user's first confirmation and only ever incremented.
    """
    __tablename__ = "user_stats"

    user_id = Column(String(USER_ID_LENGTH), primary_key=True)
    score = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("score >= 0", name="ck_user_stats_score"),
    )

    def __repr__(self):
        return f"<UserStats({self.user_id}, score={self.score})>"
