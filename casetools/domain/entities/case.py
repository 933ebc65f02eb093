"""Domain entity representing a case record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import UserSummary

CASE_SEVERITY_CRITICAL = "CRITICAL"
CASE_SEVERITY_HIGH = "HIGH"
CASE_SEVERITY_MEDIUM = "MEDIUM"
CASE_SEVERITY_LOW = "LOW"

CASE_STATUS_OPEN = "OPEN"
CASE_STATUS_ASSIGNED = "ASSIGNED"
CASE_STATUS_IN_PROGRESS = "IN_PROGRESS"
CASE_STATUS_RESOLVED = "RESOLVED"
CASE_STATUS_CLOSED = "CLOSED"
CASE_STATUS_CANCELLED = "CANCELLED"


@dataclass
class Case:
    """Case details shared with notification subscribers."""

    case_number: str
    title: str
    id: int | None = None
    description: str | None = None
    severity: str = CASE_SEVERITY_MEDIUM
    priority: int | None = None
    category: str | None = None
    status: str = CASE_STATUS_OPEN
    assigned_to: UserSummary | None = None
    assigned_by: UserSummary | None = None
    assigned_at: datetime | None = None
    resolved_at: datetime | None = None
    closed_at: datetime | None = None
    sla_deadline: datetime | None = None
    sla_breached: bool = False
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def assigned_user_id(self) -> int | None:
        """Return the identifier of the assignee, if any."""

        if self.assigned_to is None:
            return None
        return self.assigned_to.id


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
]
