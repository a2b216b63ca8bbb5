"""In-memory notification feed for the recruiter."""

import logging
import threading
from typing import List

from recruiter_pipeline.models.results import Notification, NotificationLevel

logger = logging.getLogger(__name__)


class Notifier:
    """Collects user-visible notifications in the order they were raised."""

    def __init__(self):
        self._notifications: List[Notification] = []
        self._lock = threading.Lock()

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        with self._lock:
            self._notifications.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        logger.info(message)
        return self.notify(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> Notification:
        logger.error(message)
        return self.notify(NotificationLevel.ERROR, message)

    def peek(self) -> List[Notification]:
        with self._lock:
            return list(self._notifications)

    def drain(self) -> List[Notification]:
        """Return and clear all pending notifications."""
        with self._lock:
            notifications = self._notifications
            self._notifications = []
        return notifications
