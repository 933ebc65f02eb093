"""Best-effort delivery of case notifications through the message broker."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable

from casetools.config import get_settings
from casetools.domain.entities import Case, NotificationEnvelope
from casetools.domain.errors import SerializationError
from casetools.utils import current_millis

from .broker import BrokerClient, build_broker_client
from .serializer import JsonPayloadSerializer, PayloadSerializer

logger = logging.getLogger(__name__)

BROADCAST_DESTINATION = "/topic/notifications"

CASES_CHANNEL = "cases"
ADMIN_CHANNEL = "admin"

EVENT_CASE_CREATED = "case.created"
EVENT_CASE_ASSIGNED = "case.assigned"
EVENT_CASE_UPDATED = "case.updated"
EVENT_CASE_RESOLVED = "case.resolved"


def user_destination(user_id: Any) -> str:
    """Return the private queue of ``user_id``."""

    return f"/user/{user_id}/queue/notifications"


def channel_destination(channel: str) -> str:
    """Return the topic for ``channel``."""

    return f"/topic/{channel}"


def team_channel(team_id: Any) -> str:
    """Return the channel name shared by members of ``team_id``."""

    return f"team.{team_id}"


class NotificationDispatcher:
    """Serialize payloads and hand them to the broker without raising.

    Every public method logs and swallows serialization and transport
    failures; callers never see an exception and nothing is retried.
    """

    def __init__(
        self,
        broker: BrokerClient,
        serializer: PayloadSerializer | None = None,
        *,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self._broker = broker
        self._serializer = serializer or JsonPayloadSerializer()
        self._clock = clock

    def send_to_user(self, user_id: Any, event: str, payload: Any) -> None:
        """Send ``payload`` to the private queue of ``user_id``."""

        self._deliver(user_destination(user_id), event, payload, target=f"user {user_id}")

    def broadcast(self, event: str, payload: Any) -> None:
        """Send ``payload`` to every subscriber of the global topic."""

        self._deliver(BROADCAST_DESTINATION, event, payload, target="broadcast")

    def send_to_channel(self, channel: str, event: str, payload: Any) -> None:
        """Send ``payload`` to subscribers of ``channel``."""

        self._deliver(channel_destination(channel), event, payload, target=f"channel {channel}")

    def notify_admins(self, event: str, payload: Any) -> None:
        """Send ``payload`` to the administrators channel."""

        self.send_to_channel(ADMIN_CHANNEL, event, payload)

    def send_to_team(self, team_id: Any, event: str, payload: Any) -> None:
        """Send ``payload`` to the channel shared by members of ``team_id``."""

        self.send_to_channel(team_channel(team_id), event, payload)

    def notify_new_case(self, case: Case) -> None:
        """Announce ``case`` on the cases channel and to its assignee."""

        self.send_to_channel(CASES_CHANNEL, EVENT_CASE_CREATED, case)
        assignee_id = case.assigned_user_id
        if assignee_id is not None:
            self.send_to_user(assignee_id, EVENT_CASE_ASSIGNED, case)
        logger.info("Sent new case notifications for case %s", case.case_number)

    def notify_case_update(self, case: Case) -> None:
        """Announce changes to ``case`` on the cases channel and to its assignee."""

        self.send_to_channel(CASES_CHANNEL, EVENT_CASE_UPDATED, case)
        assignee_id = case.assigned_user_id
        if assignee_id is not None:
            self.send_to_user(assignee_id, EVENT_CASE_UPDATED, case)
        logger.debug("Sent case update notifications for case %s", case.case_number)

    def notify_case_resolved(self, case: Case) -> None:
        """Tell the assignee and the administrators that ``case`` is resolved."""

        assignee_id = case.assigned_user_id
        if assignee_id is not None:
            self.send_to_user(assignee_id, EVENT_CASE_RESOLVED, case)
        self.notify_admins(EVENT_CASE_RESOLVED, case)
        logger.debug("Sent case resolved notifications for case %s", case.case_number)

    def close(self) -> None:
        """Release resources held by the broker client."""

        close = getattr(self._broker, "close", None)
        if close is not None:
            close()

    def _deliver(self, destination: str, event: str, payload: Any, *, target: str) -> None:
        try:
            envelope = NotificationEnvelope(
                event=event,
                payload=self._serializer.serialize(payload),
                timestamp=self._clock(),
            )
        except SerializationError as exc:
            logger.error("Failed to serialize %s notification for %s: %s", event, target, exc)
            return
        except Exception:
            logger.exception("Unexpected error preparing %s notification for %s", event, target)
            return

        try:
            self._broker.send(destination, envelope)
        except Exception:
            logger.exception("Failed to send %s notification to %s", event, target)
            return

        logger.debug("Sent %s notification to %s", event, target)


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the dispatcher configured from the application settings."""

    settings = get_settings()
    return NotificationDispatcher(
        build_broker_client(settings),
        JsonPayloadSerializer(camel_case=settings.notification_payload_camel_case),
    )


def reset_notification_dispatcher() -> None:
    """Forget the cached dispatcher so the next call rebuilds it."""

    get_notification_dispatcher.cache_clear()


__all__ = [
    "ADMIN_CHANNEL",
    "BROADCAST_DESTINATION",
    "CASES_CHANNEL",
    "EVENT_CASE_ASSIGNED",
    "EVENT_CASE_CREATED",
    "EVENT_CASE_RESOLVED",
    "EVENT_CASE_UPDATED",
    "NotificationDispatcher",
    "channel_destination",
    "get_notification_dispatcher",
    "reset_notification_dispatcher",
    "team_channel",
    "user_destination",
]
