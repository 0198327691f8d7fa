"""Fetch everything the readiness decision needs and run it.

Three reads happen in a fixed order: the pull request snapshot, its reviews
(plus pending review requests), then the check runs for the snapshot's head
commit. Failures are handled per signal:

- snapshot or reviews fail: GitHubFetchError propagates, no decision is made
- requested reviewers fail: treated as none, with a warning
- check runs fail: treated as not green, with a warning
"""

import logging
from dataclasses import dataclass

from ghprs.core.github.abc import GitHub
from ghprs.core.github.types import CheckRun, GitHubFetchError, RequestedReviewers, RequestSnapshot
from ghprs.core.readiness import (
    ReadinessDecision,
    ReviewSummary,
    evaluate_readiness,
    summarize_checks,
    summarize_reviews,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestEvaluation:
    """A snapshot, the summaries derived from it, and the resulting decision.

    check_runs is None when the check runs could not be fetched.
    """

    snapshot: RequestSnapshot
    reviews: ReviewSummary
    check_runs: list[CheckRun] | None
    all_green: bool
    decision: ReadinessDecision
    warnings: list[str]


def evaluate_pull_request(github: GitHub, repo: str, pr_number: int) -> PullRequestEvaluation:
    """Fetch fresh data for a pull request and decide whether it is ready.

    Args:
        github: GitHub gateway
        repo: Repository as "owner/name"
        pr_number: Pull request number

    Returns:
        PullRequestEvaluation built entirely from this call's reads

    Raises:
        GitHubFetchError: If the snapshot or the reviews cannot be read
    """
    snapshot = github.get_pull_request(repo, pr_number)
    submissions = github.get_reviews(repo, pr_number)

    warnings: list[str] = []
    try:
        requested = github.get_requested_reviewers(repo, pr_number)
    except GitHubFetchError as e:
        logger.debug("Requested reviewers unavailable for #%d: %s", pr_number, e)
        warnings.append("requested reviewers could not be loaded; pending reviews not shown")
        requested = RequestedReviewers()

    reviews = summarize_reviews(submissions, requested)

    check_runs: list[CheckRun] | None
    try:
        check_runs = github.get_check_runs(repo, snapshot.head_sha)
    except GitHubFetchError as e:
        logger.debug("Check runs unavailable for %s: %s", snapshot.head_sha, e)
        warnings.append("check runs could not be loaded; treating checks as not passing")
        check_runs = None

    all_green = check_runs is not None and summarize_checks(check_runs)

    decision = evaluate_readiness(
        snapshot,
        any_approved=reviews.any_approved,
        any_changes_requested=reviews.any_changes_requested,
        all_green=all_green,
    )
    logger.debug(
        "PR #%d: ready=%s reasons=%s warnings=%s",
        pr_number,
        decision.ready,
        decision.reasons,
        warnings,
    )

    return PullRequestEvaluation(
        snapshot=snapshot,
        reviews=reviews,
        check_runs=check_runs,
        all_green=all_green,
        decision=decision,
        warnings=warnings,
    )
