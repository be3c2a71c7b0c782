"""
Detached report, confirmation and stats records
Values handed across the store boundary, independent of any session
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class ReportRecord:
    """
    Road hazard report as stored.

    Owned by the store; services and queries only read it.
    """
    id: str
    issue_type: str
    description: str
    user_id: str
    priority: str
    status: str
    confirmation_count: int = 0
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_model(cls, report: Any) -> "ReportRecord":
        """Build a record from a `Report` ORM row."""
        return cls(
            id=report.id,
            issue_type=report.issue_type,
            description=report.description or "",
            user_id=report.user_id,
            priority=report.priority,
            status=report.status,
            confirmation_count=report.confirmation_count or 0,
            image_url=report.image_url,
            created_at=report.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "issue_type": self.issue_type,
            "description": self.description,
            "image_url": self.image_url,
            "priority": self.priority,
            "status": self.status,
            "user_id": self.user_id,
            "confirmation_count": self.confirmation_count,
            "created_at": _isoformat(self.created_at),
        }


@dataclass(frozen=True)
class ConfirmationRecord:
    """A single (report, user) confirmation."""
    report_id: str
    user_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_model(cls, confirmation: Any) -> "ConfirmationRecord":
        return cls(
            report_id=confirmation.report_id,
            user_id=confirmation.user_id,
            created_at=confirmation.created_at,
        )


@dataclass(frozen=True)
class UserStatsRecord:
    """Cumulative contribution score for one user."""
    user_id: str
    score: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, stats: Any) -> "UserStatsRecord":
        return cls(
            user_id=stats.user_id,
            score=stats.score,
            created_at=stats.created_at,
            updated_at=stats.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "score": self.score,
            "updated_at": _isoformat(self.updated_at),
        }
