"""Notification sinks."""

from swapdesk.notifications.base import (
    LogNotifier,
    Notification,
    NotificationKind,
    NotificationSink,
)

__all__ = [
    "LogNotifier",
    "Notification",
    "NotificationKind",
    "NotificationSink",
]
