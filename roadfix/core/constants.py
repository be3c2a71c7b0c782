"""
Roadfix Connect - Constants and Reference Data
Static values used throughout the application.
"""

from typing import Dict, Tuple

# =============================================================================
# REPORT FIELD VALUES
# =============================================================================

STATUS_PENDING: str = "Pending"
STATUS_IN_PROGRESS: str = "In Progress"
STATUS_RESOLVED: str = "Resolved"

# Spellings of "In Progress" seen in stored rows
STATUS_IN_PROGRESS_ALIASES: Tuple[str, ...] = (STATUS_IN_PROGRESS, "InProgress")

PRIORITY_LOW: str = "Low"
PRIORITY_MEDIUM: str = "Medium"
PRIORITY_HIGH: str = "High"

# =============================================================================
# PRESENTATION
# =============================================================================

# Badge color token per treatment class
TREATMENT_BADGE_COLORS: Dict[str, str] = {
    "pending": "yellow",
    "in-progress": "blue",
    "resolved": "green",
    "high-escalation": "red",
    "medium-escalation": "orange",
    "neutral": "gray",
}

# =============================================================================
# STORAGE LIMITS
# =============================================================================

REPORT_ID_LENGTH: int = 36
USER_ID_LENGTH: int = 64
ISSUE_TYPE_LENGTH: int = 100
FIELD_VALUE_LENGTH: int = 20
IMAGE_URL_LENGTH: int = 1024

CONFIRMATION_UNIQUE_CONSTRAINT: str = "uq_report_confirmation_report_user"
