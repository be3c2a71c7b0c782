"""
Persistent store contract for the confirmation core

Writes happen inside ConfirmationStore.transaction(); everything done
through the yielded StoreTransaction commits together or not at all.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from enum import Enum
from typing import List, Optional

from roadfix.confirmations.records import (
    ConfirmationRecord,
    ReportRecord,
    UserStatsRecord,
)


class InsertResult(Enum):
    """Result of inserting a (report, user) confirmation row."""
    ACCEPTED = "accepted"
    ALREADY_EXISTS = "already_exists"


class StoreTransaction(ABC):
    """Mutations available inside one atomic store transaction."""

    @abstractmethod
    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        """Load a report, or None if it does not exist."""

    @abstractmethod
    def insert_confirmation_atomic(self, report_id: str, user_id: str) -> InsertResult:
        """
        Insert the confirmation row.

        A duplicate pair must come back as ALREADY_EXISTS, never as an error.
        """

    @abstractmethod
    def increment_report_confirmation_count(self, report_id: str, delta: int = 1) -> int:
        """Add delta to the report's count and return the new value."""

    @abstractmethod
    def upsert_user_stats_increment(self, user_id: str, delta: int = 1) -> int:
        """Add delta to the user's score, creating the row if absent. Returns the new score."""


class ConfirmationStore(ABC):
    """Durable storage for reports, confirmations and user stats."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Context manager yielding a StoreTransaction."""

    @abstractmethod
    def query_reports_ordered_by_creation_desc(self, limit: int) -> List[ReportRecord]:
        """Newest reports first, at most `limit`."""

    @abstractmethod
    def query_confirmations_by_user(self, user_id: str) -> List[ConfirmationRecord]:
        """Every committed confirmation made by `user_id`."""

    @abstractmethod
    def query_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        """Stats for `user_id`, or None if the user never confirmed anything."""

    def check_connection(self) -> bool:
        """Whether the store is reachable."""
        return True
