"""Pydantic models describing notification requests."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class NotificationRequest(BaseModel):
    """Event name and arbitrary payload pushed to subscribers."""

    event: str = Field(..., min_length=1, max_length=100, description="Event name, e.g. case.created")
    payload: Any = Field(default=None, description="Data serialized into the envelope")


class NotificationAccepted(BaseModel):
    """Acknowledgement returned once a notification was handed to the dispatcher."""

    status: Literal["accepted"] = "accepted"


__all__ = ["NotificationAccepted", "NotificationRequest"]
