"""Fake OperatorInput driven by a scripted sequence of events."""

from ghprs.core.operator_input.abc import OperatorInput
from ghprs.core.operator_input.types import Interrupted, LineReceived, TimerElapsed, WaitResult


class FakeOperatorInput(OperatorInput):
    """Returns scripted wait results in order.

    Each entry in events is either a line of text (LineReceived) or None
    (TimerElapsed). When the script runs out every further wait returns
    Interrupted, so a watch loop under test always terminates.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, events: list[str | None] | None = None) -> None:
        self._events = list(events or [])
        self._started = False
        self._wait_timeouts: list[float] = []

    @property
    def started(self) -> bool:
        """Whether start() was called."""
        return self._started

    @property
    def wait_timeouts(self) -> list[float]:
        """Timeouts passed to wait(), in call order."""
        return self._wait_timeouts

    def start(self) -> None:
        self._started = True

    def wait(self, timeout: float) -> WaitResult:
        self._wait_timeouts.append(timeout)
        if not self._events:
            return Interrupted()
        event = self._events.pop(0)
        if event is None:
            return TimerElapsed()
        return LineReceived(event.strip())
