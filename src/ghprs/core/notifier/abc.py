"""Abstract interface for surfacing short messages to the operator."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Fire-and-forget operator notifications.

    Implementations must never raise: a notification that cannot be shown is
    simply dropped.
    """

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show a notification.

        Args:
            title: Short banner title
            message: Notification body
        """
        ...
