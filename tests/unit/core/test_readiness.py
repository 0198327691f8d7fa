"""Tests for the pure merge-readiness rules."""

from ghprs.core.github.types import RequestedReviewers
from ghprs.core.readiness import (
    REASON_CHANGES_REQUESTED,
    REASON_CHECKS_FAILING,
    REASON_MISSING_APPROVAL,
    VERDICT_REQUESTED,
    check_run_passed,
    evaluate_readiness,
    latest_verdicts,
    summarize_checks,
    summarize_reviews,
)
from tests.test_utils.builders import check, make_snapshot, review


def test_latest_verdict_replaces_earlier_submission() -> None:
    verdicts = latest_verdicts(
        [
            review("bob", "CHANGES_REQUESTED"),
            review("carol", "COMMENTED"),
            review("bob", "APPROVED"),
        ]
    )

    assert verdicts == {"bob": "APPROVED", "carol": "COMMENTED"}


def test_latest_verdict_can_revoke_approval() -> None:
    summary = summarize_reviews(
        [review("bob", "APPROVED"), review("bob", "CHANGES_REQUESTED")],
        RequestedReviewers(),
    )

    assert summary.any_approved is False
    assert summary.any_changes_requested is True


def test_requested_user_added_only_without_submission() -> None:
    summary = summarize_reviews(
        [review("bob", "APPROVED")],
        RequestedReviewers(users=("bob", "dave"), teams=("core",)),
    )

    assert summary.verdicts == {"bob": "APPROVED", "dave": VERDICT_REQUESTED}
    assert summary.requested_teams == ("core",)
    assert summary.any_approved is True


def test_teams_never_affect_aggregates() -> None:
    summary = summarize_reviews([], RequestedReviewers(teams=("core", "infra")))

    assert summary.verdicts == {}
    assert summary.any_approved is False
    assert summary.any_changes_requested is False


def test_aggregates_are_case_insensitive() -> None:
    summary = summarize_reviews([review("bob", "approved")], RequestedReviewers())

    assert summary.any_approved is True


def test_check_passes_only_when_completed_with_acceptable_conclusion() -> None:
    assert check_run_passed(check("build", "success"))
    assert check_run_passed(check("lint", "neutral"))
    assert check_run_passed(check("docs", "skipped"))
    assert not check_run_passed(check("build", "failure"))
    assert not check_run_passed(check("build", "cancelled"))
    assert not check_run_passed(check("build", "", status="in_progress"))
    assert not check_run_passed(check("build", "success", status="queued"))


def test_no_check_runs_counts_as_green() -> None:
    assert summarize_checks([]) is True


def test_neutral_and_success_together_are_green() -> None:
    assert summarize_checks([check("a", "neutral"), check("b")]) is True


def test_one_pending_check_makes_set_not_green() -> None:
    runs = [check("build"), check("test", "", status="in_progress")]

    assert summarize_checks(runs) is False


def test_all_conditions_met_is_ready() -> None:
    decision = evaluate_readiness(
        make_snapshot(),
        any_approved=True,
        any_changes_requested=False,
        all_green=True,
    )

    assert decision.ready is True
    assert decision.reasons == []


def test_unstable_mergeable_state_blocks_with_single_reason() -> None:
    decision = evaluate_readiness(
        make_snapshot(mergeable_state="unstable"),
        any_approved=True,
        any_changes_requested=False,
        all_green=True,
    )

    assert decision.ready is False
    assert decision.reasons == ["mergeable state: unstable (must be clean)"]


def test_approval_alongside_change_request_is_not_ready() -> None:
    decision = evaluate_readiness(
        make_snapshot(),
        any_approved=True,
        any_changes_requested=True,
        all_green=True,
    )

    assert decision.ready is False
    assert decision.reasons == [REASON_CHANGES_REQUESTED]


def test_reasons_reported_in_priority_order() -> None:
    decision = evaluate_readiness(
        make_snapshot(state="closed", mergeable_state="dirty"),
        any_approved=False,
        any_changes_requested=True,
        all_green=False,
    )

    assert decision.reasons == [
        "state: closed (must be open)",
        "mergeable state: dirty (must be clean)",
        REASON_CHANGES_REQUESTED,
        REASON_MISSING_APPROVAL,
        REASON_CHECKS_FAILING,
    ]


def test_mergeable_flag_is_ignored() -> None:
    decision = evaluate_readiness(
        make_snapshot(mergeable=None),
        any_approved=True,
        any_changes_requested=False,
        all_green=True,
    )

    assert decision.ready is True


def test_ready_iff_no_reasons() -> None:
    for state in ("open", "closed"):
        for mergeable_state in ("clean", "blocked", "unknown"):
            for approved in (True, False):
                for changes in (True, False):
                    for green in (True, False):
                        decision = evaluate_readiness(
                            make_snapshot(state=state, mergeable_state=mergeable_state),
                            any_approved=approved,
                            any_changes_requested=changes,
                            all_green=green,
                        )
                        assert decision.ready == (decision.reasons == [])


def test_each_failing_condition_yields_exactly_its_reason() -> None:
    passing = {"any_approved": True, "any_changes_requested": False, "all_green": True}
    cases = [
        (make_snapshot(state="closed"), {}, "state: closed (must be open)"),
        (make_snapshot(mergeable_state="blocked"), {}, "mergeable state: blocked (must be clean)"),
        (make_snapshot(), {"any_changes_requested": True}, REASON_CHANGES_REQUESTED),
        (make_snapshot(), {"any_approved": False}, REASON_MISSING_APPROVAL),
        (make_snapshot(), {"all_green": False}, REASON_CHECKS_FAILING),
    ]

    for snapshot, override, expected in cases:
        decision = evaluate_readiness(snapshot, **{**passing, **override})
        assert decision.ready is False
        assert decision.reasons == [expected]
