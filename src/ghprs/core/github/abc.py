"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod

from ghprs.core.github.types import (
    CheckRun,
    MergeOptions,
    PullRequestListing,
    RequestedReviewers,
    RequestSnapshot,
    ReviewSubmission,
)


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    Covers both data sources the readiness decision needs (pull request,
    reviews, check runs) and the two mutations the watch loop can issue.
    All implementations (real, fake and dry-run) must implement this interface.
    """

    @abstractmethod
    def get_pull_request(self, repo: str, pr_number: int) -> RequestSnapshot:
        """Fetch a fresh snapshot of a pull request.

        Args:
            repo: Repository as "owner/name"
            pr_number: Pull request number

        Raises:
            GitHubFetchError: If the request fails or the payload is malformed
        """
        ...

    @abstractmethod
    def get_reviews(self, repo: str, pr_number: int) -> list[ReviewSubmission]:
        """Fetch submitted reviews in chronological order.

        Raises:
            GitHubFetchError: If the request fails or the payload is malformed
        """
        ...

    @abstractmethod
    def get_requested_reviewers(self, repo: str, pr_number: int) -> RequestedReviewers:
        """Fetch users and teams with a pending review request.

        Raises:
            GitHubFetchError: If the request fails or the payload is malformed
        """
        ...

    @abstractmethod
    def get_check_runs(self, repo: str, sha: str) -> list[CheckRun]:
        """Fetch check runs attached to a commit.

        Args:
            repo: Repository as "owner/name"
            sha: Commit SHA (the pull request head)

        Raises:
            GitHubFetchError: If the request fails or the payload is malformed
        """
        ...

    @abstractmethod
    def search_pull_requests(self, repo: str, author: str) -> list[PullRequestListing]:
        """List pull requests in a repository opened by an author.

        Raises:
            GitHubFetchError: If the request fails or the payload is malformed
        """
        ...

    @abstractmethod
    def mark_ready(self, repo: str, pr_number: int) -> None:
        """Mark a draft pull request as ready for review.

        Raises:
            MutationError: If gh reports a failure
        """
        ...

    @abstractmethod
    def merge_pr(self, repo: str, pr_number: int, options: MergeOptions) -> None:
        """Merge a pull request.

        Args:
            repo: Repository as "owner/name"
            pr_number: Pull request number
            options: Merge strategy flags (squash, auto, delete branch)

        Raises:
            MutationError: If gh reports a failure
        """
        ...
