"""Results of waiting on operator input."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineReceived:
    """The operator entered a line (already stripped of surrounding whitespace)."""

    text: str


@dataclass(frozen=True)
class TimerElapsed:
    """The wait timed out with no input."""


@dataclass(frozen=True)
class Interrupted:
    """The operator asked to stop (Ctrl-C)."""


WaitResult = LineReceived | TimerElapsed | Interrupted
