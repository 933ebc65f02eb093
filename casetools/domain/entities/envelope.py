"""Message wrapper handed to the broker for every notification."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class NotificationEnvelope:
    """Event name, serialized payload and creation time of a notification."""

    event: str
    payload: str
    timestamp: int

    def as_dict(self) -> dict[str, Any]:
        """Return the wire representation of the envelope."""

        return asdict(self)


__all__ = ["NotificationEnvelope"]
