"""Exceptions raised while preparing or delivering notifications."""


class NotificationError(Exception):
    """Base class for notification delivery problems."""


class SerializationError(NotificationError):
    """Raised when a payload cannot be converted to its wire representation."""


class TransportError(NotificationError):
    """Raised when the broker cannot accept a message."""


__all__ = ["NotificationError", "SerializationError", "TransportError"]
