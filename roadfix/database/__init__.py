"""
Database module for Roadfix Connect
SQLAlchemy persistence for reports, confirmations and user stats
"""

from .connection import DatabaseConnection, get_db
from .models import (
    Base,
    Report,
    ReportConfirmation,
    UserStats,
    ReportPriority,
    ReportStatus,
)
from .store import SQLAlchemyConfirmationStore

__all__ = [
    "DatabaseConnection",
    "get_db",
    "Base",
    "Report",
    "ReportConfirmation",
    "UserStats",
    "ReportPriority",
    "ReportStatus",
    "SQLAlchemyConfirmationStore",
]
