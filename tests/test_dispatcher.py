"""Tests for the best-effort notification dispatcher."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from casetools.domain.entities import Case, NotificationEnvelope, UserSummary
from casetools.domain.errors import SerializationError, TransportError
from casetools.infrastructure.notifications import (
    BROADCAST_DESTINATION,
    JsonPayloadSerializer,
    NotificationDispatcher,
)

DISPATCHER_LOGGER = "casetools.infrastructure.notifications.dispatcher"


class RecordingBroker:
    """Broker double that remembers every envelope it receives."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, NotificationEnvelope]] = []

    def send(self, destination: str, envelope: NotificationEnvelope) -> None:
        self.sent.append((destination, envelope))


class FailingBroker(RecordingBroker):
    """Broker double that rejects destinations listed in ``failing``."""

    def __init__(self, *failing: str) -> None:
        super().__init__()
        self.failing = set(failing)
        self.attempts: list[str] = []

    def send(self, destination: str, envelope: NotificationEnvelope) -> None:
        self.attempts.append(destination)
        if not self.failing or destination in self.failing:
            raise TransportError(f"broker rejected {destination}")
        super().send(destination, envelope)


class RejectingSerializer:
    def serialize(self, value):
        raise SerializationError("cannot encode")


def _case(number: str = "C-1001", assignee: UserSummary | None = None) -> Case:
    return Case(case_number=number, title="Revenue drop", assigned_to=assignee)


@pytest.fixture
def broker() -> RecordingBroker:
    return RecordingBroker()


@pytest.fixture
def dispatcher(broker: RecordingBroker) -> NotificationDispatcher:
    return NotificationDispatcher(broker, JsonPayloadSerializer())


@pytest.mark.parametrize("user_id", [1, 42, "abc", 900000000001])
def test_send_to_user_targets_private_queue(dispatcher, broker, user_id):
    dispatcher.send_to_user(user_id, "notification", {"message": "hi"})

    assert [destination for destination, _ in broker.sent] == [
        "/user/" + str(user_id) + "/queue/notifications"
    ]


def test_broadcast_targets_global_topic(dispatcher, broker):
    dispatcher.broadcast("system.maintenance", {"minutes": 5})
    dispatcher.broadcast("system.ready", None)

    assert [destination for destination, _ in broker.sent] == [
        "/topic/notifications",
        "/topic/notifications",
    ]
    assert BROADCAST_DESTINATION == "/topic/notifications"


@pytest.mark.parametrize("channel", ["cases", "admin", "team.3", "managers"])
def test_send_to_channel_targets_channel_topic(dispatcher, broker, channel):
    dispatcher.send_to_channel(channel, "team.update", {})

    assert broker.sent[0][0] == "/topic/" + channel


def test_envelope_contains_event_serialized_payload_and_timestamp(broker):
    dispatcher = NotificationDispatcher(broker, JsonPayloadSerializer(), clock=lambda: 1700000000123)

    dispatcher.send_to_channel("admin", "admin.notification", {"unassigned_count": 3})

    _, envelope = broker.sent[0]
    assert envelope.as_dict() == {
        "event": "admin.notification",
        "payload": '{"unassigned_count": 3}',
        "timestamp": 1700000000123,
    }


def test_timestamps_are_non_decreasing(dispatcher, broker):
    for index in range(50):
        dispatcher.send_to_user(index, "notification", index)

    timestamps = [envelope.timestamp for _, envelope in broker.sent]
    assert timestamps == sorted(timestamps)
    assert all(isinstance(value, int) for value in timestamps)


def test_serialization_failure_skips_send_and_logs(broker, caplog):
    dispatcher = NotificationDispatcher(broker, RejectingSerializer())

    with caplog.at_level(logging.ERROR, logger=DISPATCHER_LOGGER):
        assert dispatcher.send_to_user(9, "case.assigned", object()) is None

    assert broker.sent == []
    assert "case.assigned" in caplog.text
    assert "user 9" in caplog.text


def test_cyclic_payload_does_not_reach_broker(dispatcher, broker):
    payload: dict = {}
    payload["self"] = payload

    dispatcher.send_to_channel("cases", "case.created", payload)
    dispatcher.broadcast("case.created", payload)

    assert broker.sent == []


def test_unexpected_serializer_error_is_contained(broker):
    class BrokenSerializer:
        def serialize(self, value):
            raise RuntimeError("bug")

    dispatcher = NotificationDispatcher(broker, BrokenSerializer())

    dispatcher.broadcast("notification", {})

    assert broker.sent == []


@pytest.mark.parametrize("error", [TransportError("down"), ConnectionError("reset"), RuntimeError("boom")])
def test_transport_failure_does_not_escape(error, caplog):
    class RaisingBroker:
        def send(self, destination, envelope):
            raise error

    dispatcher = NotificationDispatcher(RaisingBroker())

    with caplog.at_level(logging.ERROR, logger=DISPATCHER_LOGGER):
        dispatcher.send_to_channel("cases", "case.updated", {"id": 1})

    assert "Failed to send case.updated notification to channel cases" in caplog.text


def test_notify_new_case_without_assignee_sends_once(dispatcher, broker):
    dispatcher.notify_new_case(_case("C-1001"))

    assert len(broker.sent) == 1
    destination, envelope = broker.sent[0]
    assert destination == "/topic/cases"
    assert envelope.event == "case.created"
    assert json.loads(envelope.payload)["caseNumber"] == "C-1001"


def test_notify_new_case_with_assignee_sends_channel_then_user(dispatcher, broker):
    dispatcher.notify_new_case(_case("C-1002", UserSummary(id=7, name="Ana")))

    assert [(destination, envelope.event) for destination, envelope in broker.sent] == [
        ("/topic/cases", "case.created"),
        ("/user/7/queue/notifications", "case.assigned"),
    ]


def test_notify_new_case_user_id_42(dispatcher, broker):
    dispatcher.notify_new_case(_case("C-2000", UserSummary(id=42, name="Luis")))

    assert [(destination, envelope.event) for destination, envelope in broker.sent] == [
        ("/topic/cases", "case.created"),
        ("/user/42/queue/notifications", "case.assigned"),
    ]


def test_notify_new_case_logs_case_number(dispatcher, caplog):
    with caplog.at_level(logging.INFO, logger=DISPATCHER_LOGGER):
        dispatcher.notify_new_case(_case("C-3003"))

    assert "C-3003" in caplog.text


@pytest.mark.parametrize(
    ("assignee", "expected"),
    [
        (None, [("/topic/cases", "case.updated")]),
        (
            UserSummary(id=42, name="Luis"),
            [
                ("/topic/cases", "case.updated"),
                ("/user/42/queue/notifications", "case.updated"),
            ],
        ),
    ],
)
def test_notify_case_update(dispatcher, broker, assignee, expected):
    dispatcher.notify_case_update(_case("C-1003", assignee))

    assert [(destination, envelope.event) for destination, envelope in broker.sent] == expected


def test_channel_failure_does_not_block_user_notification():
    broker = FailingBroker("/topic/cases")
    dispatcher = NotificationDispatcher(broker)

    dispatcher.notify_new_case(_case("C-1004", UserSummary(id=7, name="Ana")))

    assert broker.attempts == ["/topic/cases", "/user/7/queue/notifications"]
    assert [destination for destination, _ in broker.sent] == ["/user/7/queue/notifications"]


def test_all_sends_failing_is_silent():
    broker = FailingBroker()
    dispatcher = NotificationDispatcher(broker)

    dispatcher.notify_case_update(_case("C-1005", UserSummary(id=7, name="Ana")))

    assert broker.attempts == ["/topic/cases", "/user/7/queue/notifications"]
    assert broker.sent == []


def test_notify_case_resolved_sends_user_then_admin(dispatcher, broker):
    dispatcher.notify_case_resolved(_case("C-1006", UserSummary(id=5, name="Eva")))

    assert [(destination, envelope.event) for destination, envelope in broker.sent] == [
        ("/user/5/queue/notifications", "case.resolved"),
        ("/topic/admin", "case.resolved"),
    ]


def test_team_and_admin_helpers(dispatcher, broker):
    dispatcher.send_to_team(12, "team.update", {"members": 3})
    dispatcher.notify_admins("admin.unassigned-case", {"caseNumber": "C-9"})

    assert [destination for destination, _ in broker.sent] == [
        "/topic/team.12",
        "/topic/admin",
    ]


def test_close_delegates_to_broker():
    class ClosableBroker(RecordingBroker):
        closed = False

        def close(self) -> None:
            self.closed = True

    broker = ClosableBroker()
    NotificationDispatcher(broker).close()
    assert broker.closed is True

    NotificationDispatcher(RecordingBroker()).close()


def test_assigned_user_id_reads_assignee():
    assert _case("C-1").assigned_user_id is None
    assert _case("C-2", UserSummary(id=11, name="Rui")).assigned_user_id == 11


def test_case_assignee_is_resolved_through_accessor(dispatcher, broker):
    class ReassignedCase(Case):
        @property
        def assigned_user_id(self):
            return 99

    dispatcher.notify_case_update(
        ReassignedCase(case_number="C-8", title="Moved", assigned_to=UserSummary(id=1, name="Old"))
    )

    assert [destination for destination, _ in broker.sent] == [
        "/topic/cases",
        "/user/99/queue/notifications",
    ]


def test_caller_mapping_payload_reaches_broker_unchanged(dispatcher, broker):
    dispatcher.send_to_user(3, "notification", {"user_id": 1, "userId": 2, "grafana_alert_id": "x"})

    _, envelope = broker.sent[0]
    assert json.loads(envelope.payload) == {"user_id": 1, "userId": 2, "grafana_alert_id": "x"}
