"""Notification channel between the synchronizer and the presentation layer.

Notifications are one-way: ``notify`` returns nothing and never raises.
The center keeps the most recent ones in a bounded buffer until the
presentation layer drains them.
"""

import logging
from collections import deque
from typing import Protocol

from tasksync.models.notification import Notification, Severity

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Anything that accepts fire-and-forget notifications."""

    def notify(
        self,
        title: str,
        description: str = "",
        severity: Severity = Severity.NORMAL,
    ) -> None: ...


class NotificationCenter:
    """Buffered, in-process notification channel."""

    def __init__(self, max_size: int = 50) -> None:
        self._buffer: deque[Notification] = deque(maxlen=max_size)

    def notify(
        self,
        title: str,
        description: str = "",
        severity: Severity = Severity.NORMAL,
    ) -> None:
        notification = Notification(title=title, description=description, severity=severity)
        self._buffer.append(notification)

        if severity == Severity.ERROR:
            logger.warning("Notification [error] %s: %s", title, description)
        else:
            logger.debug("Notification %s: %s", title, description)

    def pending(self) -> list[Notification]:
        """Notifications not yet drained, oldest first."""
        return list(self._buffer)

    def drain(self) -> list[Notification]:
        """Return and clear all buffered notifications."""
        items = list(self._buffer)
        self._buffer.clear()
        return items

    def __len__(self) -> int:
        return len(self._buffer)
