"""
Presentation classes for report status and priority
"""

from enum import Enum
from typing import Optional

from roadfix.core.constants import (
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    STATUS_IN_PROGRESS_ALIASES,
    STATUS_PENDING,
    STATUS_RESOLVED,
    TREATMENT_BADGE_COLORS,
)


class Treatment(Enum):
    """Display treatment for a status or priority badge."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    HIGH_ESCALATION = "high-escalation"
    MEDIUM_ESCALATION = "medium-escalation"
    NEUTRAL = "neutral"

    @property
    def badge_color(self) -> str:
        return TREATMENT_BADGE_COLORS[self.value]


def status_presentation(status: Optional[str]) -> Treatment:
    """Map a stored status to its treatment. Unknown values are neutral."""
    if status == STATUS_PENDING:
        return Treatment.PENDING
    if status in STATUS_IN_PROGRESS_ALIASES:
        return Treatment.IN_PROGRESS
    if status == STATUS_RESOLVED:
        return Treatment.RESOLVED
    return Treatment.NEUTRAL


def priority_presentation(priority: Optional[str]) -> Treatment:
    """Map a stored priority to its treatment. Low and unknown values are neutral."""
    if priority == PRIORITY_HIGH:
        return Treatment.HIGH_ESCALATION
    if priority == PRIORITY_MEDIUM:
        return Treatment.MEDIUM_ESCALATION
    return Treatment.NEUTRAL
