"""Notification delivery helpers for the infrastructure layer."""

from .broker import BrokerClient, NullBrokerClient, RedisBrokerClient, build_broker_client
from .dispatcher import (
    ADMIN_CHANNEL,
    BROADCAST_DESTINATION,
    CASES_CHANNEL,
    EVENT_CASE_ASSIGNED,
    EVENT_CASE_CREATED,
    EVENT_CASE_RESOLVED,
    EVENT_CASE_UPDATED,
    NotificationDispatcher,
    channel_destination,
    get_notification_dispatcher,
    reset_notification_dispatcher,
    team_channel,
    user_destination,
)
from .serializer import JsonPayloadSerializer, PayloadSerializer

__all__ = [
    "BrokerClient",
    "NullBrokerClient",
    "RedisBrokerClient",
    "build_broker_client",
    "JsonPayloadSerializer",
    "PayloadSerializer",
    "NotificationDispatcher",
    "get_notification_dispatcher",
    "reset_notification_dispatcher",
    "user_destination",
    "channel_destination",
    "team_channel",
    "BROADCAST_DESTINATION",
    "CASES_CHANNEL",
    "ADMIN_CHANNEL",
    "EVENT_CASE_CREATED",
    "EVENT_CASE_ASSIGNED",
    "EVENT_CASE_UPDATED",
    "EVENT_CASE_RESOLVED",
]
