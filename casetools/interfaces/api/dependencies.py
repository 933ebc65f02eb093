"""FastAPI dependency utilities."""

from casetools.infrastructure.notifications import (
    NotificationDispatcher,
    get_notification_dispatcher,
)


def get_dispatcher() -> NotificationDispatcher:
    """Return the shared notification dispatcher."""

    return get_notification_dispatcher()


__all__ = ["get_dispatcher"]
