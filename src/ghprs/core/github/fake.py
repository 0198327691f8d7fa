"""Fake GitHub operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from dataclasses import replace

from ghprs.core.github.abc import GitHub
from ghprs.core.github.types import (
    CheckRun,
    GitHubFetchError,
    MergeOptions,
    MutationError,
    PullRequestListing,
    RequestedReviewers,
    RequestSnapshot,
    ReviewSubmission,
)


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).

    A pull request can be given as a list of snapshots to simulate a PR that
    changes between polls: each read returns the next snapshot and the last
    one is repeated once the list runs out.
    """

    def __init__(
        self,
        *,
        pull_requests: dict[int, RequestSnapshot | list[RequestSnapshot]] | None = None,
        reviews: dict[int, list[ReviewSubmission]] | None = None,
        requested_reviewers: dict[int, RequestedReviewers] | None = None,
        check_runs: dict[str, list[CheckRun]] | None = None,
        search_results: dict[str, list[PullRequestListing]] | None = None,
        pull_request_error: str | None = None,
        reviews_error: str | None = None,
        requested_reviewers_error: str | None = None,
        check_runs_error: str | None = None,
        mark_ready_error: str | None = None,
        merge_error: str | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            pull_requests: Mapping of pr_number -> snapshot or snapshot sequence
            reviews: Mapping of pr_number -> submitted reviews in order
            requested_reviewers: Mapping of pr_number -> pending review requests
            check_runs: Mapping of head sha -> check runs
            search_results: Mapping of author login -> listing rows
            pull_request_error: If set, get_pull_request raises GitHubFetchError
            reviews_error: If set, get_reviews raises GitHubFetchError
            requested_reviewers_error: If set, get_requested_reviewers raises GitHubFetchError
            check_runs_error: If set, get_check_runs raises GitHubFetchError
            mark_ready_error: If set, mark_ready raises MutationError
            merge_error: If set, merge_pr raises MutationError
        """
        self._pull_requests: dict[int, list[RequestSnapshot]] = {}
        for number, value in (pull_requests or {}).items():
            self._pull_requests[number] = list(value) if isinstance(value, list) else [value]
        self._reviews = reviews or {}
        self._requested_reviewers = requested_reviewers or {}
        self._check_runs = check_runs or {}
        self._search_results = search_results or {}
        self._pull_request_error = pull_request_error
        self._reviews_error = reviews_error
        self._requested_reviewers_error = requested_reviewers_error
        self._check_runs_error = check_runs_error
        self._mark_ready_error = mark_ready_error
        self._merge_error = merge_error

        self._ready_prs: set[int] = set()
        self._get_pull_request_calls: list[tuple[str, int]] = []
        self._get_check_runs_calls: list[tuple[str, str]] = []
        self._marked_ready: list[tuple[str, int]] = []
        self._merged_prs: list[tuple[str, int, MergeOptions]] = []

    @property
    def get_pull_request_calls(self) -> list[tuple[str, int]]:
        """Read-only access to tracked get_pull_request() calls as (repo, pr_number)."""
        return self._get_pull_request_calls

    @property
    def get_check_runs_calls(self) -> list[tuple[str, str]]:
        """Read-only access to tracked get_check_runs() calls as (repo, sha)."""
        return self._get_check_runs_calls

    @property
    def marked_ready(self) -> list[tuple[str, int]]:
        """Pull requests that were marked ready, as (repo, pr_number)."""
        return self._marked_ready

    @property
    def merged_prs(self) -> list[tuple[str, int, MergeOptions]]:
        """Pull requests that were merged, as (repo, pr_number, options)."""
        return self._merged_prs

    def get_pull_request(self, repo: str, pr_number: int) -> RequestSnapshot:
        self._get_pull_request_calls.append((repo, pr_number))
        if self._pull_request_error is not None:
            raise GitHubFetchError(self._pull_request_error)

        snapshots = self._pull_requests.get(pr_number)
        if not snapshots:
            raise GitHubFetchError(f"pull request #{pr_number} not found in {repo}")

        snapshot = snapshots.pop(0) if len(snapshots) > 1 else snapshots[0]
        if pr_number in self._ready_prs:
            return replace(snapshot, is_draft=False)
        return snapshot

    def get_reviews(self, repo: str, pr_number: int) -> list[ReviewSubmission]:
        if self._reviews_error is not None:
            raise GitHubFetchError(self._reviews_error)
        return list(self._reviews.get(pr_number, []))

    def get_requested_reviewers(self, repo: str, pr_number: int) -> RequestedReviewers:
        if self._requested_reviewers_error is not None:
            raise GitHubFetchError(self._requested_reviewers_error)
        return self._requested_reviewers.get(pr_number, RequestedReviewers())

    def get_check_runs(self, repo: str, sha: str) -> list[CheckRun]:
        self._get_check_runs_calls.append((repo, sha))
        if self._check_runs_error is not None:
            raise GitHubFetchError(self._check_runs_error)
        return list(self._check_runs.get(sha, []))

    def search_pull_requests(self, repo: str, author: str) -> list[PullRequestListing]:
        return list(self._search_results.get(author, []))

    def mark_ready(self, repo: str, pr_number: int) -> None:
        """Record the call; later snapshots of this PR report is_draft=False."""
        if self._mark_ready_error is not None:
            raise MutationError(self._mark_ready_error)
        self._marked_ready.append((repo, pr_number))
        self._ready_prs.add(pr_number)

    def merge_pr(self, repo: str, pr_number: int, options: MergeOptions) -> None:
        if self._merge_error is not None:
            raise MutationError(self._merge_error)
        self._merged_prs.append((repo, pr_number, options))
