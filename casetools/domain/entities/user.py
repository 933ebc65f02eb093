"""Domain entity describing a user referenced by a case."""

from dataclasses import dataclass


@dataclass
class UserSummary:
    """Subset of user attributes attached to case notifications."""

    id: int
    name: str
    email: str | None = None


__all__ = ["UserSummary"]
