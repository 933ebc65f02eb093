"""Domain entities exposed by the application."""

from .case import (
    CASE_SEVERITY_CRITICAL,
    CASE_SEVERITY_HIGH,
    CASE_SEVERITY_LOW,
    CASE_SEVERITY_MEDIUM,
    CASE_STATUS_ASSIGNED,
    CASE_STATUS_CANCELLED,
    CASE_STATUS_CLOSED,
    CASE_STATUS_IN_PROGRESS,
    CASE_STATUS_OPEN,
    CASE_STATUS_RESOLVED,
    Case,
)
from .envelope import NotificationEnvelope
from .user import UserSummary

__all__ = [
    "Case",
    "CASE_SEVERITY_CRITICAL",
    "CASE_SEVERITY_HIGH",
    "CASE_SEVERITY_MEDIUM",
    "CASE_SEVERITY_LOW",
    "CASE_STATUS_OPEN",
    "CASE_STATUS_ASSIGNED",
    "CASE_STATUS_IN_PROGRESS",
    "CASE_STATUS_RESOLVED",
    "CASE_STATUS_CLOSED",
    "CASE_STATUS_CANCELLED",
    "NotificationEnvelope",
    "UserSummary",
]
