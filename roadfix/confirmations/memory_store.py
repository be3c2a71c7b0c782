"""
In-memory confirmation store
Process-local store for development runs and tests
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from roadfix.confirmations.errors import ReportNotFoundError
from roadfix.confirmations.records import (
    ConfirmationRecord,
    ReportRecord,
    UserStatsRecord,
)
from roadfix.confirmations.store import (
    ConfirmationStore,
    InsertResult,
    StoreTransaction,
)

logger = logging.getLogger(__name__)


class _InMemoryTransaction(StoreTransaction):
    """Stages writes until the owning store commits them."""

    def __init__(self, store: "InMemoryConfirmationStore"):
        self._store = store
        self._reports: Dict[str, ReportRecord] = {}
        self._confirmations: Dict[Tuple[str, str], ConfirmationRecord] = {}
        self._stats: Dict[str, UserStatsRecord] = {}

    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        if report_id in self._reports:
            return self._reports[report_id]
        return self._store._reports.get(report_id)

    def insert_confirmation_atomic(self, report_id: str, user_id: str) -> InsertResult:
        key = (report_id, user_id)
        if key in self._confirmations or key in self._store._confirmations:
            return InsertResult.ALREADY_EXISTS

        self._confirmations[key] = ConfirmationRecord(report_id=report_id, user_id=user_id)
        return InsertResult.ACCEPTED

    def increment_report_confirmation_count(self, report_id: str, delta: int = 1) -> int:
        report = self.get_report(report_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} not found", report_id=report_id)

        updated = replace(report, confirmation_count=report.confirmation_count + delta)
        self._reports[report_id] = updated
        return updated.confirmation_count

    def upsert_user_stats_increment(self, user_id: str, delta: int = 1) -> int:
        now = datetime.now(timezone.utc)
        current = self._stats.get(user_id) or self._store._stats.get(user_id)

        if current is None:
            updated = UserStatsRecord(user_id=user_id, score=delta, created_at=now, updated_at=now)
        else:
            updated = replace(current, score=current.score + delta, updated_at=now)

        self._stats[user_id] = updated
        return updated.score

    def commit(self) -> None:
        self._store._reports.update(self._reports)
        self._store._confirmations.update(self._confirmations)
        self._store._stats.update(self._stats)


class InMemoryConfirmationStore(ConfirmationStore):
    """
    Confirmation store backed by dictionaries.

    A single lock serialises whole transactions and reads, so no reader
    ever observes a half-applied confirmation.
    """

    def __init__(self, reports: Optional[Iterable[ReportRecord]] = None):
        self._lock = threading.Lock()
        self._reports: Dict[str, ReportRecord] = {r.id: r for r in (reports or [])}
        self._confirmations: Dict[Tuple[str, str], ConfirmationRecord] = {}
        self._stats: Dict[str, UserStatsRecord] = {}

        logger.info(f"InMemoryConfirmationStore initialized with {len(self._reports)} reports")

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        with self._lock:
            tx = _InMemoryTransaction(self)
            yield tx
            tx.commit()

    def query_reports_ordered_by_creation_desc(self, limit: int) -> List[ReportRecord]:
        with self._lock:
            reports = sorted(
                self._reports.values(),
                key=lambda r: (r.created_at, r.id),
                reverse=True,
            )
        return reports[:limit]

    def query_confirmations_by_user(self, user_id: str) -> List[ConfirmationRecord]:
        with self._lock:
            return [c for (_, uid), c in self._confirmations.items() if uid == user_id]

    def query_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        with self._lock:
            return self._stats.get(user_id)
