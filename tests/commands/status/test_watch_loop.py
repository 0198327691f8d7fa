"""Tests for the status watch loop state machine."""

import click

from ghprs.cli.commands.status.watch_loop import (
    NOTIFICATION_TITLE,
    WatchLoop,
    WatchSession,
    format_interval,
)
from ghprs.core.config_store import GlobalConfig
from ghprs.core.context import GhprsContext
from ghprs.core.evaluation import evaluate_pull_request
from ghprs.core.github.fake import FakeGitHub
from ghprs.core.github.types import MergeOptions, RequestSnapshot
from ghprs.core.notifier import FakeNotifier
from ghprs.core.operator_input import FakeOperatorInput
from ghprs.core.operator_input.types import WaitResult
from ghprs.core.time import FakeTime
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.builders import HEAD_SHA, check, make_snapshot, review

REPO = "octo/widgets"


def _github(snapshots: RequestSnapshot | list[RequestSnapshot], **kwargs) -> FakeGitHub:
    kwargs.setdefault("reviews", {42: [review("bob", "APPROVED")]})
    kwargs.setdefault("check_runs", {HEAD_SHA: [check("build")]})
    return FakeGitHub(pull_requests={42: snapshots}, **kwargs)


def _run(
    github: FakeGitHub,
    events: list[str | None],
    *,
    watch: bool = True,
    time: FakeTime | None = None,
    operator_input: FakeOperatorInput | None = None,
    dry_run: bool = False,
) -> tuple[GhprsContext, WatchSession]:
    ctx = GhprsContext.for_test(
        github=github,
        notifier=FakeNotifier(),
        operator_input=operator_input or FakeOperatorInput(events),
        time=time or FakeTime(),
        feedback=FakeUserFeedback(),
        dry_run=dry_run,
    )
    session = WatchSession(repo=REPO, pr_number=42, watch=watch)
    WatchLoop(ctx, session).run()
    return ctx, session


class _TypingOperatorInput(FakeOperatorInput):
    """Operator who takes a while to type each scripted event."""

    def __init__(self, events: list[str | None], time: FakeTime, delay: float) -> None:
        super().__init__(events)
        self._time = time
        self._delay = delay

    def wait(self, timeout: float) -> WaitResult:
        result = super().wait(timeout)
        self._time.sleep(self._delay)
        return result


def test_format_interval() -> None:
    assert format_interval(60) == "1m"
    assert format_interval(120) == "2m"
    assert format_interval(45) == "45s"


def test_one_shot_prints_status_and_exits() -> None:
    github = _github(make_snapshot())

    ctx, session = _run(github, [], watch=False)

    feedback = ctx.feedback
    assert isinstance(feedback, FakeUserFeedback)
    assert isinstance(ctx.operator_input, FakeOperatorInput)
    assert ctx.operator_input.started is False
    assert ctx.operator_input.wait_timeouts == []
    assert feedback.clear_count == 0
    assert "#42 Add widget (open)" in [click.unstyle(line) for line in feedback.info_messages]
    assert not any("refreshing" in line for line in feedback.info_messages)
    assert session.last_ready is True
    assert github.merged_prs == []


def test_one_shot_fetch_error_is_reported_not_raised() -> None:
    github = FakeGitHub(pull_request_error="HTTP 502")

    ctx, session = _run(github, [], watch=False)

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert ctx.feedback.error_messages == ["error: HTTP 502"]
    assert session.last_ready is False


def test_watch_clears_and_prompts_each_poll() -> None:
    github = _github(make_snapshot(mergeable_state="blocked"))

    ctx, _ = _run(github, [None])

    feedback = ctx.feedback
    assert isinstance(feedback, FakeUserFeedback)
    assert feedback.clear_count == 2
    assert "⏳ Waiting for PR to be ready..." in feedback.warning_messages
    assert feedback.info_messages.count("12:00:00 ⏳ refreshing in 1m...") == 2
    assert isinstance(ctx.operator_input, FakeOperatorInput)
    assert ctx.operator_input.started is True


def test_poll_interval_comes_from_config() -> None:
    github = _github(make_snapshot())
    operator_input = FakeOperatorInput([])
    ctx = GhprsContext.for_test(
        github=github,
        operator_input=operator_input,
        feedback=FakeUserFeedback(),
        global_config=GlobalConfig(
            poll_interval_seconds=15,
            desktop_notifications=True,
            terminal_notifications=True,
            token_env_var="GH_TOKEN",
        ),
    )

    WatchLoop(ctx, WatchSession(repo=REPO, pr_number=42, watch=True)).run()

    assert operator_input.wait_timeouts == [15.0]
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "12:00:00 ⏳ refreshing in 15s..." in ctx.feedback.info_messages


def test_draft_prompt_offers_ready() -> None:
    github = _github(make_snapshot(is_draft=True))

    ctx, _ = _run(github, [])

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "📝 PR is in DRAFT mode" in ctx.feedback.warning_messages
    assert "Type 'ready' to mark it as ready for review" in ctx.feedback.info_messages


def test_ready_prompt_offers_merge() -> None:
    github = _github(make_snapshot())

    ctx, _ = _run(github, [])

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "🎉 PR is READY to merge!" in ctx.feedback.success_messages
    assert "Type 'merge' to merge now" in ctx.feedback.info_messages


def test_notifies_once_per_transition_to_ready() -> None:
    snapshots = [
        make_snapshot(),
        make_snapshot(),
        make_snapshot(mergeable_state="unstable"),
        make_snapshot(),
    ]
    github = _github(snapshots)

    ctx, session = _run(github, [None, None, None])

    assert isinstance(ctx.notifier, FakeNotifier)
    assert ctx.notifier.notifications == [
        (NOTIFICATION_TITLE, "PR #42 is READY to merge ✅"),
        (NOTIFICATION_TITLE, "PR #42 is READY to merge ✅"),
    ]
    assert session.last_ready is True


def test_failed_poll_keeps_ready_flag() -> None:
    github = FakeGitHub(pull_request_error="HTTP 502")

    ctx, session = _run(github, [None])

    assert isinstance(ctx.notifier, FakeNotifier)
    assert ctx.notifier.notifications == []
    assert session.last_ready is False
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert ctx.feedback.error_messages == ["error: HTTP 502", "error: HTTP 502"]


def test_partial_data_warnings_shown() -> None:
    github = _github(make_snapshot(), check_runs_error="HTTP 500")

    ctx, session = _run(github, [], watch=False)

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert ctx.feedback.warning_messages == [
        "⚠️  check runs could not be loaded; treating checks as not passing"
    ]
    assert session.last_ready is False


def test_merge_when_ready_squash_merges_and_terminates() -> None:
    github = _github(make_snapshot())

    ctx, _ = _run(github, ["merge", None])

    assert github.merged_prs == [(REPO, 42, MergeOptions())]
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "\n✅ Merging PR #42 with squash..." in ctx.feedback.success_messages
    assert "✅ Squash merge completed successfully!" in ctx.feedback.success_messages
    assert isinstance(ctx.operator_input, FakeOperatorInput)
    assert len(ctx.operator_input.wait_timeouts) == 1


def test_merge_refused_on_fresh_data_lists_reasons() -> None:
    # Ready at the last poll, blocked by the time the operator types merge
    github = _github([make_snapshot(), make_snapshot(mergeable_state="blocked")])
    time = FakeTime()

    ctx, _ = _run(github, ["merge"], time=time)

    assert github.merged_prs == []
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "\n❌ PR is NOT ready to merge:" in ctx.feedback.error_messages

    fresh = evaluate_pull_request(github, REPO, 42)
    printed = [line for line in ctx.feedback.info_messages if line.startswith("  • ")]
    assert printed == [f"  • {reason}" for reason in fresh.decision.reasons]
    assert printed == ["  • mergeable state: blocked (must be clean)"]
    assert time.sleep_calls == [5.0]


def test_merge_failure_returns_to_polling() -> None:
    github = _github(make_snapshot(), merge_error="Pull request is not mergeable")
    time = FakeTime()

    ctx, _ = _run(github, ["merge"], time=time)

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "❌ Merge failed: Pull request is not mergeable" in ctx.feedback.error_messages
    assert time.sleep_calls == [3.0]
    assert len(github.get_pull_request_calls) == 3


def test_merge_fetch_error_returns_to_polling() -> None:
    github = FakeGitHub(pull_request_error="HTTP 502")
    time = FakeTime()

    ctx, _ = _run(github, ["merge"], time=time)

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert any(m.startswith("❌ Error fetching PR:") for m in ctx.feedback.error_messages)
    assert time.sleep_calls == [3.0]
    assert github.merged_prs == []


def test_dry_run_merge_prints_instead_of_merging() -> None:
    github = _github(make_snapshot())

    ctx, _ = _run(github, ["merge"], dry_run=True)

    assert github.merged_prs == []
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "✅ Squash merge completed successfully!" in ctx.feedback.success_messages


def test_ready_marks_draft_and_repolls() -> None:
    github = _github(make_snapshot(is_draft=True))
    time = FakeTime()

    ctx, _ = _run(github, ["ready"], time=time)

    assert github.marked_ready == [(REPO, 42)]
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "✅ PR is now ready for review!" in ctx.feedback.success_messages
    assert time.sleep_calls == [2.0]
    # The poll after marking no longer shows the draft prompt
    assert ctx.feedback.warning_messages.count("📝 PR is in DRAFT mode") == 1


def test_ready_on_non_draft_is_a_noop() -> None:
    github = _github(make_snapshot(is_draft=False))
    time = FakeTime()

    ctx, _ = _run(github, ["ready"], time=time)

    assert github.marked_ready == []
    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "\n⚠️  PR is already ready for review (not a draft)" in ctx.feedback.warning_messages
    assert time.sleep_calls == [3.0]


def test_ready_failure_returns_to_polling() -> None:
    github = _github(make_snapshot(is_draft=True), mark_ready_error="permission denied")
    time = FakeTime()

    ctx, _ = _run(github, ["ready"], time=time)

    assert isinstance(ctx.feedback, FakeUserFeedback)
    assert "❌ Failed to mark PR as ready: permission denied" in ctx.feedback.error_messages
    assert time.sleep_calls == [3.0]


def test_unrecognized_input_keeps_deadline() -> None:
    github = _github(make_snapshot())
    time = FakeTime()
    operator_input = _TypingOperatorInput(["hello", "", None], time, delay=10.0)

    _run(github, [], time=time, operator_input=operator_input)

    # Noise neither re-polls nor restarts the timer
    assert operator_input.wait_timeouts[:3] == [60.0, 50.0, 40.0]
    assert len(github.get_pull_request_calls) == 2


def test_interrupt_terminates_without_mutations() -> None:
    github = _github(make_snapshot(is_draft=True))

    _run(github, [])

    assert github.merged_prs == []
    assert github.marked_ready == []