"""Abstract interface for line-oriented operator input."""

from abc import ABC, abstractmethod

from ghprs.core.operator_input.types import WaitResult


class OperatorInput(ABC):
    """Source of operator command lines that can be waited on with a timeout."""

    @abstractmethod
    def start(self) -> None:
        """Begin collecting input. Calling it more than once has no effect."""
        ...

    @abstractmethod
    def wait(self, timeout: float) -> WaitResult:
        """Block until a line arrives or timeout seconds pass, whichever is first.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            LineReceived, TimerElapsed, or Interrupted
        """
        ...
