from .case import CasePayload, UserSummaryPayload
from .notification import NotificationAccepted, NotificationRequest

__all__ = [
    "CasePayload",
    "UserSummaryPayload",
    "NotificationAccepted",
    "NotificationRequest",
]
