"""User-facing status notifications.

Notifications are informational only; the trade flow never branches on them.
"""

import itertools
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    LOADING = "loading"


@dataclass
class Notification:
    """A notification shown to the user."""

    handle: int
    kind: NotificationKind
    message: str
    dismissed: bool = False
    timestamp: float = field(default_factory=time.time)


class NotificationSink(ABC):
    """Displays status messages to the user."""

    @abstractmethod
    def show(self, kind: NotificationKind, message: str) -> int:
        """Show a notification and return a handle for dismissing it."""
        pass

    def dismiss(self, handle: int) -> None:
        """Dismiss a notification (no-op by default)."""
        pass


class LogNotifier(NotificationSink):
    """Writes notifications to the log and keeps them in memory."""

    _LEVELS = {
        NotificationKind.SUCCESS: logging.INFO,
        NotificationKind.ERROR: logging.WARNING,
        NotificationKind.LOADING: logging.DEBUG,
    }

    def __init__(self, max_history: int = 100):
        self.max_history = max_history
        self.notifications: list[Notification] = []
        self._handles = itertools.count(1)

    def show(self, kind: NotificationKind, message: str) -> int:
        kind = NotificationKind(kind)
        notification = Notification(handle=next(self._handles), kind=kind, message=message)
        self.notifications.append(notification)
        if len(self.notifications) > self.max_history:
            self.notifications = self.notifications[-self.max_history:]

        logger.log(self._LEVELS[kind], f"[{kind.value}] {message}")
        return notification.handle

    def dismiss(self, handle: int) -> None:
        for notification in self.notifications:
            if notification.handle == handle:
                notification.dismissed = True

    def messages(self, kind: Optional[NotificationKind] = None) -> list[str]:
        """Messages shown so far, optionally filtered by kind."""
        return [n.message for n in self.notifications if kind is None or n.kind == kind]
