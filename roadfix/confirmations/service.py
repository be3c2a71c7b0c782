"""
Crowd confirmation service
Records a user's confirmation of a report and credits the user's score
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from roadfix.core.config import settings
from roadfix.confirmations.errors import (
    ReportNotFoundError,
    SelfConfirmationError,
)
from roadfix.confirmations.store import ConfirmationStore, InsertResult

logger = logging.getLogger(__name__)


class ConfirmationOutcome(Enum):
    """Non-error outcomes of a confirmation request."""
    CONFIRMED = "confirmed"
    ALREADY_CONFIRMED = "already_confirmed"


@dataclass
class ConfirmationResult:
    """Result of a confirmation request."""
    outcome: ConfirmationOutcome
    report_id: str
    user_id: str
    confirmation_count: int
    user_score: Optional[int] = None

    @property
    def created(self) -> bool:
        return self.outcome == ConfirmationOutcome.CONFIRMED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "outcome": self.outcome.value,
            "report_id": self.report_id,
            "user_id": self.user_id,
            "confirmation_count": self.confirmation_count,
            "user_score": self.user_score,
        }


def _require_id(value: str, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value


class ConfirmationService:
    """
    Applies crowd confirmations to reports.

    A confirmation inserts the (report, user) row, adds one to the report's
    confirmation count and credits the confirming user, all in a single
    store transaction. Repeats come back as ALREADY_CONFIRMED without
    touching the store; self-confirmation and unknown reports raise.
    """

    def __init__(
        self,
        store: ConfirmationStore,
        points_per_confirmation: Optional[int] = None
    ):
        """
        Initialize confirmation service.

        Args:
            store: Persistent store for reports, confirmations and stats
            points_per_confirmation: Score credited per confirmation
        """
        self.store = store
        self.points_per_confirmation = (
            points_per_confirmation
            if points_per_confirmation is not None
            else settings.points_per_confirmation
        )
        if self.points_per_confirmation < 0:
            raise ValueError("points_per_confirmation must not be negative")

    def confirm(self, report_id: str, user_id: str) -> ConfirmationResult:
        """
        Confirm a report on behalf of a user.

        Args:
            report_id: Report being confirmed
            user_id: Authenticated user confirming it

        Returns:
            ConfirmationResult with CONFIRMED or ALREADY_CONFIRMED

        Raises:
            ReportNotFoundError: report_id does not exist
            SelfConfirmationError: user_id owns the report
            StoreUnavailableError: the store failed; nothing was applied
        """
        _require_id(report_id, "report_id")
        _require_id(user_id, "user_id")

        with self.store.transaction() as tx:
            report = tx.get_report(report_id)

            if report is None:
                logger.warning(f"Confirmation of unknown report {report_id} by {user_id}")
                raise ReportNotFoundError(
                    f"Report {report_id} not found",
                    report_id=report_id,
                    user_id=user_id,
                )

            if report.user_id == user_id:
                logger.warning(f"User {user_id} tried to confirm own report {report_id}")
                raise SelfConfirmationError(
                    "Users cannot confirm their own reports",
                    report_id=report_id,
                    user_id=user_id,
                )

            if tx.insert_confirmation_atomic(report_id, user_id) is InsertResult.ALREADY_EXISTS:
                logger.info(f"Report {report_id} already confirmed by {user_id}")
                return ConfirmationResult(
                    outcome=ConfirmationOutcome.ALREADY_CONFIRMED,
                    report_id=report_id,
                    user_id=user_id,
                    confirmation_count=report.confirmation_count,
                )

            count = tx.increment_report_confirmation_count(report_id, 1)
            score = tx.upsert_user_stats_increment(user_id, self.points_per_confirmation)

        logger.info(f"Report {report_id} confirmed by {user_id} (count={count}, score={score})")

        return ConfirmationResult(
            outcome=ConfirmationOutcome.CONFIRMED,
            report_id=report_id,
            user_id=user_id,
            confirmation_count=count,
            user_score=score,
        )
