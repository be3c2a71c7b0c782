"""
Pytest configuration and fixtures
"""
import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from roadfix.confirmations import InMemoryConfirmationStore, ReportRecord
from roadfix.database import DatabaseConnection, Report, SQLAlchemyConfirmationStore

BASE_TIME = datetime(2026, 1, 27, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_reports():
    """Sample community reports; R1 is owned by U1 and has 3 confirmations."""
    return [
        ReportRecord(
            id="R1",
            issue_type="Pothole",
            description="Deep pothole in the left lane near the school gate",
            user_id="U1",
            priority="High",
            status="Pending",
            confirmation_count=3,
            image_url="https://cdn.example.org/reports/r1.jpg",
            created_at=BASE_TIME,
        ),
        ReportRecord(
            id="R2",
            issue_type="Wrong Parking",
            description="Truck parked across the cycle lane",
            user_id="U3",
            priority="Medium",
            status="In Progress",
            image_url="https://cdn.example.org/reports/r2.jpg",
            created_at=BASE_TIME + timedelta(hours=1),
        ),
        ReportRecord(
            id="R3",
            issue_type="Broken Streetlight",
            description="Streetlight out at the junction",
            user_id="U2",
            priority="Low",
            status="Resolved",
            created_at=BASE_TIME + timedelta(hours=2),
        ),
        ReportRecord(
            id="R4",
            issue_type="Flooding",
            description="Underpass flooded after the storm",
            user_id="U4",
            priority="Urgent",
            status="Archived",
            created_at=BASE_TIME + timedelta(minutes=30),
        ),
    ]


@pytest.fixture
def memory_store(sample_reports):
    """In-memory store seeded with the sample reports."""
    return InMemoryConfirmationStore(sample_reports)


def seed_reports(db, records):
    """Create tables and insert report rows for the given records."""
    db.create_tables()

    with db.get_session() as session:
        for record in records:
            session.add(Report(
                id=record.id,
                issue_type=record.issue_type,
                description=record.description,
                image_url=record.image_url,
                priority=record.priority,
                status=record.status,
                user_id=record.user_id,
                confirmation_count=record.confirmation_count,
                created_at=record.created_at,
            ))


@pytest.fixture
def database(tmp_path, sample_reports):
    """File-backed SQLite database seeded with the sample reports."""
    db = DatabaseConnection(database_url=f"sqlite:///{tmp_path / 'roadfix.db'}")
    seed_reports(db, sample_reports)

    yield db
    db.close()


@pytest.fixture
def memory_database(sample_reports):
    """In-memory SQLite database seeded with the sample reports."""
    db = DatabaseConnection(database_url="sqlite://")
    seed_reports(db, sample_reports)

    yield db
    db.close()


@pytest.fixture
def sql_store(database):
    """SQLAlchemy store over the seeded SQLite database."""
    return SQLAlchemyConfirmationStore(database)


@pytest.fixture(params=["memory_store", "sql_store"])
def store(request):
    """Each store implementation in turn."""
    return request.getfixturevalue(request.param)
