"""Pydantic models describing case payloads received by the API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from casetools.domain.entities import CASE_SEVERITY_MEDIUM, CASE_STATUS_OPEN, Case, UserSummary


class UserSummaryPayload(BaseModel):
    """User reference attached to a case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str | None = None

    def to_entity(self) -> UserSummary:
        return UserSummary(id=self.id, name=self.name, email=self.email)


class CasePayload(BaseModel):
    """Case record as sent by the service that persisted it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    case_number: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    id: int | None = None
    description: str | None = None
    severity: str = CASE_SEVERITY_MEDIUM
    priority: int | None = None
    category: str | None = None
    status: str = CASE_STATUS_OPEN
    assigned_to: UserSummaryPayload | None = None
    assigned_by: UserSummaryPayload | None = None
    assigned_at: datetime | None = None
    resolved_at: datetime | None = None
    closed_at: datetime | None = None
    sla_deadline: datetime | None = None
    sla_breached: bool = False
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_entity(self) -> Case:
        """Return the domain representation of the payload."""

        values = self.model_dump(exclude={"assigned_to", "assigned_by"})
        return Case(
            **values,
            assigned_to=self.assigned_to.to_entity() if self.assigned_to else None,
            assigned_by=self.assigned_by.to_entity() if self.assigned_by else None,
        )


__all__ = ["CasePayload", "UserSummaryPayload"]
