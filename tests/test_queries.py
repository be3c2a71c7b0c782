"""
Tests for read-side report queries
"""
import pytest
from datetime import datetime, timedelta, timezone

from roadfix.confirmations import (
    ConfirmationService,
    InMemoryConfirmationStore,
    ReportQueries,
    ReportRecord,
    Treatment,
)

BASE_TIME = datetime(2026, 1, 27, 14, 30, tzinfo=timezone.utc)


def many_reports(count):
    return [
        ReportRecord(
            id=f"bulk-{i:03d}",
            issue_type="Pothole",
            description=f"Pothole #{i}",
            user_id=f"owner-{i % 7}",
            priority="Medium",
            status="Pending",
            created_at=BASE_TIME + timedelta(minutes=i * 13 % 97),
        )
        for i in range(count)
    ]


class TestListRecentReports:
    """Test suite for list_recent_reports."""

    def test_newest_first(self, store):
        """Test reports come back ordered by created_at descending."""
        reports = ReportQueries(store).list_recent_reports()

        assert [r.id for r in reports] == ["R3", "R2", "R4", "R1"]

    def test_limit_respected(self, store):
        """Test the limit bounds the result."""
        reports = ReportQueries(store).list_recent_reports(limit=2)

        assert [r.id for r in reports] == ["R3", "R2"]

    def test_default_limit_is_fifty(self):
        """Test at most 50 reports by default, non-increasing in time."""
        store = InMemoryConfirmationStore(many_reports(120))

        reports = ReportQueries(store).list_recent_reports()

        assert len(reports) == 50
        for newer, older in zip(reports, reports[1:]):
            assert newer.created_at >= older.created_at

    def test_limit_capped(self, store):
        """Test limits above the maximum are capped."""
        queries = ReportQueries(store, max_limit=3)

        assert len(queries.list_recent_reports(limit=500)) == 3

    @pytest.mark.parametrize("limit", [0, -5])
    def test_invalid_limit(self, store, limit):
        """Test a non-positive limit is rejected."""
        with pytest.raises(ValueError):
            ReportQueries(store).list_recent_reports(limit=limit)

    @pytest.mark.parametrize("options", [{"default_limit": 0}, {"max_limit": 0}])
    def test_explicit_zero_limits_rejected(self, memory_store, options):
        """Test a zero default or maximum is an error, not a fallback to settings."""
        with pytest.raises(ValueError):
            ReportQueries(memory_store, **options)

    def test_reflects_committed_confirmations(self, store):
        """Test the listed count includes committed confirmations."""
        ConfirmationService(store).confirm("R1", "U2")

        reports = ReportQueries(store).list_recent_reports()

        assert next(r for r in reports if r.id == "R1").confirmation_count == 4


class TestUserQueries:
    """Test suite for per-user queries."""

    def setup_method(self):
        """Setup test fixtures."""
        self.user_id = "U2"

    def test_confirmed_ids_empty_initially(self, store):
        """Test a new user has confirmed nothing."""
        assert ReportQueries(store).list_user_confirmed_report_ids(self.user_id) == set()

    def test_confirmed_ids_after_confirmations(self, store):
        """Test every committed confirmation is listed once."""
        service = ConfirmationService(store)
        service.confirm("R1", self.user_id)
        service.confirm("R2", self.user_id)
        service.confirm("R2", self.user_id)

        confirmed = ReportQueries(store).list_user_confirmed_report_ids(self.user_id)

        assert confirmed == {"R1", "R2"}

    def test_confirmed_ids_scoped_to_user(self, store):
        """Test another user's confirmations are not included."""
        ConfirmationService(store).confirm("R1", "U3")

        assert ReportQueries(store).list_user_confirmed_report_ids(self.user_id) == set()

    def test_stats_absent_until_first_confirmation(self, store):
        """Test stats are created lazily."""
        queries = ReportQueries(store)
        assert queries.get_user_stats(self.user_id) is None

        ConfirmationService(store).confirm("R1", self.user_id)

        stats = queries.get_user_stats(self.user_id)
        assert stats.user_id == self.user_id
        assert stats.score == 1
        assert stats.to_dict()["score"] == 1


class TestCommunityFeed:
    """Test suite for the per-user community feed."""

    def test_feed_annotations(self, store):
        """Test ownership, confirmation and classes on each view."""
        ConfirmationService(store).confirm("R1", "U2")

        views = {v.report.id: v for v in ReportQueries(store).community_feed("U2")}

        assert views["R3"].is_own
        assert not views["R3"].can_confirm
        assert views["R1"].confirmed_by_user
        assert not views["R1"].can_confirm
        assert views["R4"].can_confirm
        assert views["R1"].status_class == Treatment.PENDING
        assert views["R1"].priority_class == Treatment.HIGH_ESCALATION
        assert views["R4"].status_class == Treatment.NEUTRAL
        assert views["R4"].priority_class == Treatment.NEUTRAL

    def test_feed_suppresses_irrelevant_images(self, store):
        """Test images are hidden for suppressed issue types."""
        views = {v.report.id: v for v in ReportQueries(store).community_feed("U2")}

        assert views["R2"].display_image_url is None
        assert views["R2"].report.image_url is not None
        assert views["R1"].display_image_url == "https://cdn.example.org/reports/r1.jpg"

    def test_feed_suppression_configurable(self, store):
        """Test the suppressed issue types can be overridden."""
        queries = ReportQueries(store, image_suppressed_issue_types=[])

        views = {v.report.id: v for v in queries.community_feed("U2")}

        assert views["R2"].display_image_url is not None

    def test_feed_order_and_dict(self, store):
        """Test the feed keeps recency order and serialises views."""
        views = ReportQueries(store).community_feed("U1", limit=3)

        assert [v.report.id for v in views] == ["R3", "R2", "R4"]
        data = views[0].to_dict()
        assert data["status_class"] == "resolved"
        assert data["priority_class"] == "neutral"
        assert data["can_confirm"] is True
