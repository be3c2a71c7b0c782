"""
SQLAlchemy implementation of the confirmation store
Relative updates and ON CONFLICT inserts; no read-modify-write of counters
"""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roadfix.confirmations.errors import ReportNotFoundError, StoreUnavailableError
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
from .connection import DatabaseConnection, get_db
from .models import Report, ReportConfirmation, UserStats, utcnow

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT support
DIALECT_INSERTS: Dict[str, Callable] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

reports_table = Report.__table__
confirmations_table = ReportConfirmation.__table__
user_stats_table = UserStats.__table__


class SQLAlchemyTransaction(StoreTransaction):
    """Store mutations bound to one open session."""

    def __init__(self, session: Session, insert: Callable):
        self.session = session
        self._insert = insert

    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        report = self.session.get(Report, report_id)
        if report is None:
            return None
        return ReportRecord.from_model(report)

    def insert_confirmation_atomic(self, report_id: str, user_id: str) -> InsertResult:
        stmt = (
            self._insert(confirmations_table)
            .values(report_id=report_id, user_id=user_id, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["report_id", "user_id"])
        )
        result = self.session.execute(stmt)

        if result.rowcount == 1:
            return InsertResult.ACCEPTED
        return InsertResult.ALREADY_EXISTS

    def increment_report_confirmation_count(self, report_id: str, delta: int = 1) -> int:
        stmt = (
            update(reports_table)
            .where(reports_table.c.id == report_id)
            .values(confirmation_count=reports_table.c.confirmation_count + delta)
        )
        result = self.session.execute(stmt)

        if result.rowcount != 1:
            raise ReportNotFoundError(f"Report {report_id} not found", report_id=report_id)

        return self.session.execute(
            select(reports_table.c.confirmation_count).where(reports_table.c.id == report_id)
        ).scalar_one()

    def upsert_user_stats_increment(self, user_id: str, delta: int = 1) -> int:
        now = utcnow()
        stmt = (
            self._insert(user_stats_table)
            .values(user_id=user_id, score=delta, created_at=now, updated_at=now)
            .on_conflict_do_update(
                index_elements=[user_stats_table.c.user_id],
                set_={
                    "score": user_stats_table.c.score + delta,
                    "updated_at": now,
                },
            )
        )
        self.session.execute(stmt)

        return self.session.execute(
            select(user_stats_table.c.score).where(user_stats_table.c.user_id == user_id)
        ).scalar_one()


class SQLAlchemyConfirmationStore(ConfirmationStore):
    """
    Confirmation store on PostgreSQL or SQLite.

    Uniqueness of (report_id, user_id) is enforced by the schema
    constraint; the application holds no locks of its own.
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        """
        Initialize store.

        Args:
            db: Database connection (defaults to the global connection)
        """
        self.db = db or get_db()

        dialect = self.db.dialect_name
        if dialect not in DIALECT_INSERTS:
            raise ValueError(f"Unsupported database dialect: {dialect}")
        self._insert = DIALECT_INSERTS[dialect]

        logger.info(f"SQLAlchemyConfirmationStore initialized ({dialect})")

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        try:
            with self.db.get_session() as session:
                yield SQLAlchemyTransaction(session, self._insert)
        except SQLAlchemyError as e:
            logger.error(f"Confirmation transaction failed: {e}")
            raise StoreUnavailableError("Persistent store unavailable") from e

    @contextmanager
    def _read_session(self) -> Iterator[Session]:
        try:
            with self.db.get_session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Store query failed: {e}")
            raise StoreUnavailableError("Persistent store unavailable") from e

    def query_reports_ordered_by_creation_desc(self, limit: int) -> List[ReportRecord]:
        stmt = (
            select(Report)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .limit(limit)
        )
        with self._read_session() as session:
            return [ReportRecord.from_model(r) for r in session.scalars(stmt)]

    def query_confirmations_by_user(self, user_id: str) -> List[ConfirmationRecord]:
        stmt = (
            select(ReportConfirmation)
            .where(ReportConfirmation.user_id == user_id)
            .order_by(ReportConfirmation.created_at)
        )
        with self._read_session() as session:
            return [ConfirmationRecord.from_model(c) for c in session.scalars(stmt)]

    def query_user_stats(self, user_id: str) -> Optional[UserStatsRecord]:
        with self._read_session() as session:
            stats = session.get(UserStats, user_id)
            return UserStatsRecord.from_model(stats) if stats else None

    def check_connection(self) -> bool:
        return self.db.check_connection()
