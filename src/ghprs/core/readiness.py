"""Merge-readiness decision for a pull request.

Everything in this module is pure: the functions take already-fetched data
and never perform I/O, so each rule can be tested against hand-built inputs.

A pull request is ready when all of these hold, checked in this order (which
is also the order blocking reasons are reported in):

1. it is open
2. its mergeable_state is "clean"
3. nobody's latest review requests changes
4. somebody's latest review approves
5. every check run completed with success, neutral or skipped
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ghprs.core.github.types import CheckRun, RequestedReviewers, RequestSnapshot, ReviewSubmission

VERDICT_APPROVED = "APPROVED"
VERDICT_CHANGES_REQUESTED = "CHANGES_REQUESTED"
VERDICT_REQUESTED = "requested"

PASSING_CONCLUSIONS = frozenset({"success", "neutral", "skipped"})

REASON_CHANGES_REQUESTED = "changes requested by reviewers"
REASON_MISSING_APPROVAL = "missing required approvals"
REASON_CHECKS_FAILING = "checks are not all passing"


@dataclass(frozen=True)
class ReviewSummary:
    """Latest verdict per reviewer plus the two aggregate flags.

    verdicts keeps insertion order: submitted reviewers in order of first
    submission, then requested-only reviewers.
    """

    verdicts: dict[str, str]
    requested_teams: tuple[str, ...]
    any_approved: bool
    any_changes_requested: bool


@dataclass(frozen=True)
class ReadinessDecision:
    """Whether a pull request may be merged now, and what blocks it if not."""

    ready: bool
    reasons: list[str] = field(default_factory=list)


def latest_verdicts(submissions: Iterable[ReviewSubmission]) -> dict[str, str]:
    """Collapse review submissions to one verdict per reviewer.

    Submissions must be in chronological order; a later submission from the
    same reviewer always replaces the earlier one.
    """
    verdicts: dict[str, str] = {}
    for submission in submissions:
        verdicts[submission.reviewer] = submission.verdict
    return verdicts


def summarize_reviews(
    submissions: Iterable[ReviewSubmission],
    requested: RequestedReviewers,
) -> ReviewSummary:
    """Reduce reviews and pending requests to a ReviewSummary.

    Requested users are added as "requested" only when they have no submitted
    review, so a pending re-request never hides an approval or a change
    request. Teams are kept for display and never affect the aggregates.
    """
    verdicts = latest_verdicts(submissions)
    for user in requested.users:
        if user not in verdicts:
            verdicts[user] = VERDICT_REQUESTED

    normalized = {verdict.upper() for verdict in verdicts.values()}
    return ReviewSummary(
        verdicts=verdicts,
        requested_teams=requested.teams,
        any_approved=VERDICT_APPROVED in normalized,
        any_changes_requested=VERDICT_CHANGES_REQUESTED in normalized,
    )


def check_run_passed(run: CheckRun) -> bool:
    """Whether a single check run completed with an acceptable conclusion."""
    if run.status.lower() != "completed":
        return False
    return run.conclusion.lower() in PASSING_CONCLUSIONS


def summarize_checks(runs: Iterable[CheckRun]) -> bool:
    """Return True when every check run passed.

    One pending or failing run makes the whole set not green. No runs at all
    counts as green.
    """
    return all(check_run_passed(run) for run in runs)


def evaluate_readiness(
    snapshot: RequestSnapshot,
    *,
    any_approved: bool,
    any_changes_requested: bool,
    all_green: bool,
) -> ReadinessDecision:
    """Decide whether a pull request can be merged right now.

    snapshot.mergeable is never consulted; GitHub fills it in late and
    mergeable_state carries the same information.

    Args:
        snapshot: Fresh pull request snapshot
        any_approved: Whether any reviewer's latest verdict is APPROVED
        any_changes_requested: Whether any reviewer's latest verdict is CHANGES_REQUESTED
        all_green: Whether every check run passed (False when checks are unknown)

    Returns:
        ReadinessDecision with one reason per failing condition, in priority order
    """
    reasons: list[str] = []

    if snapshot.state.lower() != "open":
        reasons.append(f"state: {snapshot.state} (must be open)")
    if snapshot.mergeable_state.lower() != "clean":
        reasons.append(f"mergeable state: {snapshot.mergeable_state} (must be clean)")
    if any_changes_requested:
        reasons.append(REASON_CHANGES_REQUESTED)
    if not any_approved:
        reasons.append(REASON_MISSING_APPROVAL)
    if not all_green:
        reasons.append(REASON_CHECKS_FAILING)

    return ReadinessDecision(ready=not reasons, reasons=reasons)
