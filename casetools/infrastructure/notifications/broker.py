"""Broker clients that relay notification envelopes to subscribers."""

from __future__ import annotations

import json
import logging
from typing import Protocol

import redis

from casetools.config import Settings
from casetools.domain.entities import NotificationEnvelope
from casetools.domain.errors import TransportError

logger = logging.getLogger(__name__)


class BrokerClient(Protocol):
    """Capability required by the dispatcher to hand off envelopes."""

    def send(self, destination: str, envelope: NotificationEnvelope) -> None:
        """Deliver ``envelope`` to ``destination`` or raise on failure."""


class RedisBrokerClient:
    """Publish envelopes on Redis pub/sub channels named after destinations.

    Redis pub/sub is fire-and-forget: a message published while nobody is
    subscribed is simply lost, which is acceptable for UI notifications.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBrokerClient":
        """Create a client for ``url``; the connection is opened lazily."""

        return cls(redis.Redis.from_url(url, encoding="utf-8", decode_responses=True))

    def send(self, destination: str, envelope: NotificationEnvelope) -> None:
        message = json.dumps(envelope.as_dict())
        try:
            receivers = self._client.publish(destination, message)
        except redis.RedisError as exc:
            raise TransportError(f"Redis publish to {destination} failed: {exc}") from exc

        if not receivers:
            logger.debug("No subscribers listening on %s for %s", destination, envelope.event)

    def close(self) -> None:
        """Release the pooled Redis connections."""

        self._client.close()


class NullBrokerClient:
    """Broker used when notifications are disabled; drops every envelope."""

    def send(self, destination: str, envelope: NotificationEnvelope) -> None:
        logger.debug("Notifications disabled; dropping %s for %s", envelope.event, destination)

    def close(self) -> None:
        return None


def build_broker_client(settings: Settings) -> RedisBrokerClient | NullBrokerClient:
    """Return the broker client matching ``settings``."""

    if not settings.notifications_enabled:
        logger.info("Notifications are disabled; using the null broker")
        return NullBrokerClient()
    return RedisBrokerClient.from_url(settings.broker_url)


__all__ = [
    "BrokerClient",
    "NullBrokerClient",
    "RedisBrokerClient",
    "build_broker_client",
]
