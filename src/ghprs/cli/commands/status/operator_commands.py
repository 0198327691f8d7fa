"""Commands the operator can type while a pull request is being watched."""

from enum import Enum


class OperatorCommand(Enum):
    """Closed set of operator commands.

    Anything unrecognized maps to NOOP rather than an error.
    """

    MERGE = "merge"
    READY = "ready"
    NOOP = "noop"


def parse_operator_command(text: str) -> OperatorCommand:
    """Classify one line of operator input (trimmed, case-insensitive)."""
    match text.strip().lower():
        case "merge":
            return OperatorCommand.MERGE
        case "ready":
            return OperatorCommand.READY
        case _:
            return OperatorCommand.NOOP
