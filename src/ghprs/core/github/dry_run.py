"""Dry-run wrapper for GitHub operations."""

from ghprs.cli.output import user_output
from ghprs.core.github.abc import GitHub
from ghprs.core.github.types import (
    CheckRun,
    MergeOptions,
    PullRequestListing,
    RequestedReviewers,
    RequestSnapshot,
    ReviewSubmission,
)


class DryRunGitHub(GitHub):
    """Dry-run wrapper for GitHub operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what would have run and return without executing.

    This lets the whole watch loop, readiness checks included, run against a
    real pull request without ever changing it.
    """

    def __init__(self, wrapped: GitHub) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real GitHub operations implementation to wrap
        """
        self._wrapped = wrapped

    def get_pull_request(self, repo: str, pr_number: int) -> RequestSnapshot:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_pull_request(repo, pr_number)

    def get_reviews(self, repo: str, pr_number: int) -> list[ReviewSubmission]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_reviews(repo, pr_number)

    def get_requested_reviewers(self, repo: str, pr_number: int) -> RequestedReviewers:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_requested_reviewers(repo, pr_number)

    def get_check_runs(self, repo: str, sha: str) -> list[CheckRun]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.get_check_runs(repo, sha)

    def search_pull_requests(self, repo: str, author: str) -> list[PullRequestListing]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.search_pull_requests(repo, author)

    def mark_ready(self, repo: str, pr_number: int) -> None:
        """Print the command instead of marking the PR ready."""
        user_output(f"[DRY RUN] Would run: gh pr ready {pr_number} --repo {repo}")

    def merge_pr(self, repo: str, pr_number: int, options: MergeOptions) -> None:
        """Print the command instead of merging."""
        flags = " ".join(options.as_flags())
        user_output(f"[DRY RUN] Would run: gh pr merge {pr_number} --repo {repo} {flags}")
