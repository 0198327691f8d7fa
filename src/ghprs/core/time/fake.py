"""Fake Time implementation for testing.

FakeTime is an in-memory implementation that tracks sleep() calls without
actually sleeping. Its clock only moves when sleep() is called.
"""

from datetime import datetime, timedelta

from ghprs.core.time.abc import Time


class FakeTime(Time):
    """In-memory fake implementation that tracks calls without sleeping.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(self, *, start: datetime | None = None) -> None:
        """Create FakeTime with empty call tracking.

        Args:
            start: Wall-clock reading at elapsed zero (defaults to 2025-01-01 12:00:00)
        """
        self._start = start if start is not None else datetime(2025, 1, 1, 12, 0, 0)
        self._elapsed = 0.0
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Get the list of sleep() calls that were made.

        This property is for test assertions only.
        """
        return self._sleep_calls

    def sleep(self, seconds: float) -> None:
        """Track sleep call and advance the clock without sleeping."""
        self._sleep_calls.append(seconds)
        self._elapsed += seconds

    def monotonic(self) -> float:
        return self._elapsed

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)
