"""
Roadfix Connect - Core Utilities
Central configuration, logging, and reference constants.
"""

from roadfix.core.config import settings, get_settings, Settings
from roadfix.core.constants import (
    STATUS_PENDING,
    STATUS_IN_PROGRESS,
    STATUS_RESOLVED,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_HIGH,
    TREATMENT_BADGE_COLORS,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "STATUS_PENDING",
    "STATUS_IN_PROGRESS",
    "STATUS_RESOLVED",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_HIGH",
    "TREATMENT_BADGE_COLORS",
]
