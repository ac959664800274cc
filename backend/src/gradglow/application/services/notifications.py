"""
Notifications
User-facing messages emitted by the store after mutations and degraded fetches
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from gradglow.core.logging_config import logger


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Toast-style message: short title plus a human-readable description"""

    title: str
    description: str
    level: NotificationLevel = NotificationLevel.INFO

    @classmethod
    def success(cls, title: str, description: str) -> "Notification":
        return cls(title, description, NotificationLevel.SUCCESS)

    @classmethod
    def error(cls, title: str, description: str) -> "Notification":
        return cls(title, description, NotificationLevel.ERROR)


class INotifier(ABC):
    """Sink the view layer implements to show notifications"""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass


# Loguru level per notification level
_LOG_LEVELS = {
    NotificationLevel.SUCCESS: "SUCCESS",
    NotificationLevel.INFO: "INFO",
    NotificationLevel.WARNING: "WARNING",
    NotificationLevel.ERROR: "ERROR",
}


class LoggingNotifier(INotifier):
    """Default sink: writes notifications to the log"""

    def notify(self, notification: Notification) -> None:
        logger.log(
            _LOG_LEVELS[notification.level],
            f"{notification.title}: {notification.description}"
        )
