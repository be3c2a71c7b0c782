"""
Roadfix Connect - Confirmations Module
Crowd confirmation of road hazard reports and contributor scoring.
"""

from roadfix.confirmations.errors import (
    ConfirmationError,
    ReportNotFoundError,
    SelfConfirmationError,
    StoreUnavailableError,
)
from roadfix.confirmations.records import (
    ReportRecord,
    ConfirmationRecord,
    UserStatsRecord,
)
from roadfix.confirmations.store import (
    ConfirmationStore,
    StoreTransaction,
    InsertResult,
)
from roadfix.confirmations.memory_store import InMemoryConfirmationStore
from roadfix.confirmations.service import (
    ConfirmationService,
    ConfirmationResult,
    ConfirmationOutcome,
)
from roadfix.confirmations.queries import ReportQueries, ReportView
from roadfix.confirmations.classification import (
    Treatment,
    status_presentation,
    priority_presentation,
)

__all__ = [
    # Errors
    "ConfirmationError",
    "ReportNotFoundError",
    "SelfConfirmationError",
    "StoreUnavailableError",
    # Records
    "ReportRecord",
    "ConfirmationRecord",
    "UserStatsRecord",
    # Store
    "ConfirmationStore",
    "StoreTransaction",
    "InsertResult",
    "InMemoryConfirmationStore",
    # Service
    "ConfirmationService",
    "ConfirmationResult",
    "ConfirmationOutcome",
    # Queries
    "ReportQueries",
    "ReportView",
    # Classification
    "Treatment",
    "status_presentation",
    "priority_presentation",
]
