"""
Read-side queries over reports, confirmations and user stats
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set

from roadfix.core.config import settings
from roadfix.confirmations.classification import (
    Treatment,
    priority_presentation,
    status_presentation,
)
from roadfix.confirmations.records import ReportRecord, UserStatsRecord
from roadfix.confirmations.store import ConfirmationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportView:
    """A report annotated for one viewing user."""
    report: ReportRecord
    is_own: bool
    confirmed_by_user: bool
    status_class: Treatment
    priority_class: Treatment
    display_image_url: Optional[str]

    @property
    def can_confirm(self) -> bool:
        return not self.is_own and not self.confirmed_by_user

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = self.report.to_dict()
        data.update(
            image_url=self.display_image_url,
            is_own=self.is_own,
            confirmed_by_user=self.confirmed_by_user,
            can_confirm=self.can_confirm,
            status_class=self.status_class.value,
            priority_class=self.priority_class.value,
        )
        return data


class ReportQueries:
    """
    Read-only projections for the community reports screen.

    Results reflect committed store state only; the confirmed-id set is a
    display hint and plays no part in enforcing uniqueness.
    """

    def __init__(
        self,
        store: ConfirmationStore,
        default_limit: Optional[int] = None,
        max_limit: Optional[int] = None,
        image_suppressed_issue_types: Optional[Iterable[str]] = None
    ):
        self.store = store
        self.default_limit = (
            default_limit if default_limit is not None else settings.recent_reports_limit
        )
        self.max_limit = max_limit if max_limit is not None else settings.max_reports_limit
        if self.default_limit < 1 or self.max_limit < 1:
            raise ValueError("default_limit and max_limit must be at least 1")
        self.image_suppressed_issue_types = frozenset(
            image_suppressed_issue_types
            if image_suppressed_issue_types is not None
            else settings.image_suppressed_issue_types
        )

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return min(limit, self.max_limit)

    def list_recent_reports(self, limit: Optional[int] = None) -> List[ReportRecord]:
        """
        Most recent reports first.

        Args:
            limit: Maximum number of reports (default from settings)

        Returns:
            Reports ordered by created_at descending
        """
        return self.store.query_reports_ordered_by_creation_desc(self._resolve_limit(limit))

    def list_user_confirmed_report_ids(self, user_id: str) -> Set[str]:
        """IDs of every report `user_id` has confirmed."""
        return {c.report_id for c in self.store.query_confirmations_by_user(user_id)}

    def get_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        """Stats for `user_id`, None until their first confirmation."""
        return self.store.query_user_stats(user_id)

    def community_feed(self, user_id: str, limit: Optional[int] = None) -> List[ReportView]:
        """
        Recent reports annotated for `user_id`.

        Args:
            user_id: Viewing user
            limit: Maximum number of reports

        Returns:
            ReportView list in recency order
        """
        reports = self.list_recent_reports(limit)
        confirmed = self.list_user_confirmed_report_ids(user_id)

        views = [self._to_view(report, user_id, confirmed) for report in reports]
        logger.debug(f"Community feed for {user_id}: {len(views)} reports, {len(confirmed)} confirmed")
        return views

    def _to_view(self, report: ReportRecord, user_id: str, confirmed: Set[str]) -> ReportView:
        image_url = report.image_url
        if report.issue_type in self.image_suppressed_issue_types:
            image_url = None

        return ReportView(
            report=report,
            is_own=report.user_id == user_id,
            confirmed_by_user=report.id in confirmed,
            status_class=status_presentation(report.status),
            priority_class=priority_presentation(report.priority),
            display_image_url=image_url,
        )

