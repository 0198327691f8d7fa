from ghprs.core.operator_input.abc import OperatorInput
from ghprs.core.operator_input.fake import FakeOperatorInput
from ghprs.core.operator_input.real import StdinOperatorInput
from ghprs.core.operator_input.types import Interrupted, LineReceived, TimerElapsed, WaitResult

__all__ = [
    "FakeOperatorInput",
    "Interrupted",
    "LineReceived",
    "OperatorInput",
    "StdinOperatorInput",
    "TimerElapsed",
    "WaitResult",
]
