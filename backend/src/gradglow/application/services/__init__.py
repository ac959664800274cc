"""Application Services"""

from .notifications import INotifier, LoggingNotifier, Notification, NotificationLevel

__all__ = ["INotifier", "LoggingNotifier", "Notification", "NotificationLevel"]
