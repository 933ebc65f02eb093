"""Endpoints that push notifications to broker subscribers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status

from casetools.infrastructure.notifications import NotificationDispatcher
from casetools.interfaces.api.dependencies import get_dispatcher
from casetools.interfaces.api.schemas import (
    CasePayload,
    NotificationAccepted,
    NotificationRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

CHANNEL_PATTERN = r"^[A-Za-z0-9._-]+$"


@router.post(
    "/broadcast",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def broadcast_notification(
    request: NotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Send a notification to every connected user."""

    dispatcher.broadcast(request.event, request.payload)
    return NotificationAccepted()


@router.post(
    "/channels/{channel}",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def send_channel_notification(
    request: NotificationRequest,
    channel: str = Path(..., max_length=100, pattern=CHANNEL_PATTERN),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Send a notification to the subscribers of ``channel``."""

    dispatcher.send_to_channel(channel, request.event, request.payload)
    return NotificationAccepted()


@router.post(
    "/users/{user_id}",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def send_user_notification(
    request: NotificationRequest,
    user_id: int = Path(..., gt=0),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Send a notification to the private queue of ``user_id``."""

    dispatcher.send_to_user(user_id, request.event, request.payload)
    return NotificationAccepted()


@router.post(
    "/cases/created",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def case_created(
    case: CasePayload,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Announce a newly stored case."""

    dispatcher.notify_new_case(case.to_entity())
    return NotificationAccepted()


@router.post(
    "/cases/updated",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def case_updated(
    case: CasePayload,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationAccepted:
    """Announce changes to an existing case."""

    dispatcher.notify_case_update(case.to_entity())
    return NotificationAccepted()
