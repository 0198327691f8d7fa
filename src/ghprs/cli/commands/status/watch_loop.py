"""Poll a pull request, report on it, and act on operator commands.

The loop is a small state machine:

    POLLING ──(one-shot)──────────────────────────────► TERMINATED
       │
       ▼
    AWAITING_COMMAND ──timer──► POLLING
       │  ├──"merge"──► MERGING ──merged──► TERMINATED
       │  │                └──refused / failed──► POLLING
       │  ├──"ready"──► MARKING_READY ──► POLLING
       │  ├──other────► AWAITING_COMMAND (same deadline)
       │  └──Ctrl-C───► TERMINATED

Only the control loop reads or writes last_ready; the stdin reader thread
behind OperatorInput never touches session state.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from ghprs.cli.commands.status.operator_commands import OperatorCommand, parse_operator_command
from ghprs.cli.rendering import render_status
from ghprs.core.context import GhprsContext
from ghprs.core.evaluation import PullRequestEvaluation, evaluate_pull_request
from ghprs.core.github.types import GitHubFetchError, MergeOptions, MutationError
from ghprs.core.operator_input import Interrupted, LineReceived, TimerElapsed

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "GitHub PR"

# Pauses so the operator can read a message before the screen is redrawn
REFUSED_MERGE_PAUSE_SECONDS = 5.0
ERROR_PAUSE_SECONDS = 3.0
READY_SUCCESS_PAUSE_SECONDS = 2.0


class WatchState(Enum):
    POLLING = auto()
    AWAITING_COMMAND = auto()
    MERGING = auto()
    MARKING_READY = auto()
    TERMINATED = auto()


@dataclass
class WatchSession:
    """Per-invocation state. repo and pr_number never change once created."""

    repo: str
    pr_number: int
    watch: bool
    last_ready: bool = False


def format_interval(seconds: int) -> str:
    if seconds % 60 == 0:
        return f"{seconds // 60}m"
    return f"{seconds}s"


def ready_message(pr_number: int) -> str:
    return f"PR #{pr_number} is READY to merge ✅"


class WatchLoop:
    """Drives one `status` invocation from first poll to termination."""

    def __init__(self, ctx: GhprsContext, session: WatchSession) -> None:
        self._ctx = ctx
        self._session = session
        self._interval = ctx.global_config.poll_interval_seconds
        self._deadline = 0.0

    @property
    def session(self) -> WatchSession:
        return self._session

    def run(self) -> None:
        """Run until a merge succeeds, the operator interrupts, or one-shot mode finishes."""
        if self._session.watch:
            self._ctx.operator_input.start()

        state = WatchState.POLLING
        try:
            while state is not WatchState.TERMINATED:
                logger.debug("watch state: %s", state.name)
                state = self._step(state)
        except KeyboardInterrupt:
            # Ctrl-C outside a wait (mid-fetch or mid-pause) ends the session the same way
            logger.debug("interrupted in state %s", state.name)

    def _step(self, state: WatchState) -> WatchState:
        match state:
            case WatchState.POLLING:
                return self._poll()
            case WatchState.AWAITING_COMMAND:
                return self._await_command()
            case WatchState.MERGING:
                return self._merge()
            case WatchState.MARKING_READY:
                return self._mark_ready()
            case WatchState.TERMINATED:
                return WatchState.TERMINATED

    def _poll(self) -> WatchState:
        feedback = self._ctx.feedback
        if self._session.watch:
            feedback.clear_screen()

        try:
            evaluation = evaluate_pull_request(
                self._ctx.github, self._session.repo, self._session.pr_number
            )
        except GitHubFetchError as e:
            logger.debug("poll failed: %s", e)
            feedback.error(f"error: {e}")
            evaluation = None

        if evaluation is not None:
            self._report(evaluation)

        if not self._session.watch:
            return WatchState.TERMINATED

        if evaluation is not None:
            self._show_prompt(evaluation)
        now = self._ctx.time.now().strftime("%H:%M:%S")
        feedback.info(f"{now} ⏳ refreshing in {format_interval(self._interval)}...")
        self._deadline = self._ctx.time.monotonic() + self._interval
        return WatchState.AWAITING_COMMAND

    def _report(self, evaluation: PullRequestEvaluation) -> None:
        feedback = self._ctx.feedback
        for line in render_status(evaluation):
            feedback.info(line)
        for warning in evaluation.warnings:
            feedback.warning(f"⚠️  {warning}")

        ready = evaluation.decision.ready
        if ready and not self._session.last_ready:
            logger.debug("PR #%d became ready; notifying", self._session.pr_number)
            self._ctx.notifier.notify(NOTIFICATION_TITLE, ready_message(self._session.pr_number))
        self._session.last_ready = ready

    def _show_prompt(self, evaluation: PullRequestEvaluation) -> None:
        feedback = self._ctx.feedback
        feedback.info("")
        if evaluation.snapshot.is_draft:
            feedback.warning("📝 PR is in DRAFT mode")
            feedback.info("Type 'ready' to mark it as ready for review")
            feedback.info("Type 'merge' to attempt merge anyway")
        elif evaluation.decision.ready:
            feedback.success("🎉 PR is READY to merge!")
            feedback.info("Type 'merge' to merge now")
        else:
            feedback.warning("⏳ Waiting for PR to be ready...")
            feedback.info("Type 'merge' to attempt merge anyway")

    def _await_command(self) -> WatchState:
        remaining = max(self._deadline - self._ctx.time.monotonic(), 0.0)
        result = self._ctx.operator_input.wait(remaining)

        match result:
            case TimerElapsed():
                return WatchState.POLLING
            case Interrupted():
                logger.debug("interrupted by operator")
                return WatchState.TERMINATED
            case LineReceived(text=text):
                command = parse_operator_command(text)
                logger.debug("operator input %r -> %s", text, command.name)
                match command:
                    case OperatorCommand.MERGE:
                        return WatchState.MERGING
                    case OperatorCommand.READY:
                        return WatchState.MARKING_READY
                    case OperatorCommand.NOOP:
                        return WatchState.AWAITING_COMMAND

    def _merge(self) -> WatchState:
        feedback = self._ctx.feedback
        repo = self._session.repo
        pr_number = self._session.pr_number

        # The last poll may be a minute old; decide on fresh data only
        try:
            evaluation = evaluate_pull_request(self._ctx.github, repo, pr_number)
        except GitHubFetchError as e:
            feedback.error(f"❌ Error fetching PR: {e}")
            self._ctx.time.sleep(ERROR_PAUSE_SECONDS)
            return WatchState.POLLING

        if not evaluation.decision.ready:
            feedback.error("\n❌ PR is NOT ready to merge:")
            for reason in evaluation.decision.reasons:
                feedback.info(f"  • {reason}")
            self._ctx.time.sleep(REFUSED_MERGE_PAUSE_SECONDS)
            return WatchState.POLLING

        feedback.success(f"\n✅ Merging PR #{pr_number} with squash...")
        try:
            self._ctx.github.merge_pr(repo, pr_number, MergeOptions())
        except MutationError as e:
            feedback.error(f"❌ Merge failed: {e}")
            self._ctx.time.sleep(ERROR_PAUSE_SECONDS)
            return WatchState.POLLING

        feedback.success("✅ Squash merge completed successfully!")
        return WatchState.TERMINATED

    def _mark_ready(self) -> WatchState:
        feedback = self._ctx.feedback
        repo = self._session.repo
        pr_number = self._session.pr_number

        try:
            snapshot = self._ctx.github.get_pull_request(repo, pr_number)
        except GitHubFetchError as e:
            feedback.error(f"❌ Error fetching PR: {e}")
            self._ctx.time.sleep(ERROR_PAUSE_SECONDS)
            return WatchState.POLLING

        if not snapshot.is_draft:
            feedback.warning("\n⚠️  PR is already ready for review (not a draft)")
            self._ctx.time.sleep(ERROR_PAUSE_SECONDS)
            return WatchState.POLLING

        feedback.success(f"\n✅ Marking PR #{pr_number} as ready for review...")
        try:
            self._ctx.github.mark_ready(repo, pr_number)
        except MutationError as e:
            feedback.error(f"❌ Failed to mark PR as ready: {e}")
            self._ctx.time.sleep(ERROR_PAUSE_SECONDS)
            return WatchState.POLLING

        feedback.success("✅ PR is now ready for review!")
        self._ctx.time.sleep(READY_SUCCESS_PAUSE_SECONDS)
        return WatchState.POLLING
