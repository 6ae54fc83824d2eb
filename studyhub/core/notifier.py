"""
Notification sink abstraction.

Services report user-visible notices through a Notifier instead of
returning them, so the same code can feed a per-request collector or a
queue drained by a later request.

Dependencies: studyhub.models.notification
System role: Toast notification boundary
"""

from abc import ABC, abstractmethod

from studyhub.models.notification import Notification


class Notifier(ABC):
    """Receives user-visible notices."""

    @abstractmethod
    def notify(self, title: str, description: str, variant: str = "default") -> None:
        """Deliver a notice."""


class NotificationCollector(Notifier):
    """Notifier that keeps notices in memory until drained."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(
            Notification(title=title, description=description, variant=variant)
        )

    def drain(self) -> list[Notification]:
        """Return and clear collected notices."""
        drained, self.notifications = self.notifications, []
        return drained
