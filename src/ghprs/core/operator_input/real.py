"""Operator input read from stdin on a background thread."""

import logging
import queue
import sys
import threading
from typing import TextIO

from ghprs.core.operator_input.abc import OperatorInput
from ghprs.core.operator_input.types import Interrupted, LineReceived, TimerElapsed, WaitResult

logger = logging.getLogger(__name__)


class StdinOperatorInput(OperatorInput):
    """Reads stdin lines on a daemon thread and hands them over through a queue.

    The queue is unbounded: lines typed faster than the loop consumes them are
    kept in order rather than dropped. Waiting is a blocking Queue.get with a
    timeout, so a line and the timer race without any polling. Once stdin hits
    EOF the reader thread exits and every later wait just times out.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize StdinOperatorInput.

        Args:
            stream: Stream to read from (defaults to sys.stdin at start time)
        """
        self._stream = stream
        self._lines: queue.Queue[str] = queue.Queue()
        self._reader: threading.Thread | None = None

    def start(self) -> None:
        if self._reader is not None:
            return
        self._reader = threading.Thread(target=self._read_lines, name="ghprs-stdin", daemon=True)
        self._reader.start()

    def _read_lines(self) -> None:
        stream = self._stream if self._stream is not None else sys.stdin
        for line in stream:
            self._lines.put(line.strip())
        logger.debug("stdin closed; no further operator commands")

    def wait(self, timeout: float) -> WaitResult:
        try:
            text = self._lines.get(timeout=max(timeout, 0.0))
        except queue.Empty:
            return TimerElapsed()
        except KeyboardInterrupt:
            return Interrupted()
        return LineReceived(text)
