"""
Confirmation failures reported back to callers

A repeated confirmation is not an error; see ConfirmationOutcome.ALREADY_CONFIRMED.
"""

from typing import Any, Dict, Optional


class ConfirmationError(Exception):
    """Base class for rejected or failed confirmations."""

    kind = "confirmation_error"

    def __init__(
        self,
        message: str,
        report_id: Optional[str] = None,
        user_id: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.report_id = report_id
        self.user_id = user_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "report_id": self.report_id,
        }


class ReportNotFoundError(ConfirmationError):
    """The referenced report does not exist."""

    kind = "not_found"


class SelfConfirmationError(ConfirmationError):
    """A user tried to confirm their own report."""

    kind = "self_confirmation_rejected"


class StoreUnavailableError(ConfirmationError):
    """The persistent store could not complete the request. Not retried."""

    kind = "store_unavailable"
