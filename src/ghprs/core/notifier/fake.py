"""Fake Notifier that records notifications for test assertions."""

from ghprs.core.notifier.abc import Notifier


class FakeNotifier(Notifier):
    """In-memory fake that records every notify() call."""

    def __init__(self) -> None:
        self._notifications: list[tuple[str, str]] = []

    @property
    def notifications(self) -> list[tuple[str, str]]:
        """Recorded (title, message) pairs in call order."""
        return self._notifications

    def notify(self, title: str, message: str) -> None:
        self._notifications.append((title, message))
