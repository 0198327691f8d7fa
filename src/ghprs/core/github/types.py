"""Type definitions for GitHub operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestSnapshot:
    """One read of a pull request, taken fresh for every evaluation."""

    number: int
    title: str
    state: str  # "open" or "closed"
    is_draft: bool
    head_sha: str
    mergeable_state: str  # "clean", "blocked", "dirty", "unstable", "unknown", ...
    # Advisory only: GitHub may fill this in late, so it never blocks on its own
    mergeable: bool | None
    url: str
    author: str


@dataclass(frozen=True)
class ReviewSubmission:
    """A single submitted review, in chronological order as GitHub returns them."""

    reviewer: str
    verdict: str  # "APPROVED", "CHANGES_REQUESTED", "COMMENTED", "DISMISSED", ...


@dataclass(frozen=True)
class RequestedReviewers:
    """Reviewers asked for a review who have not yet submitted one."""

    users: tuple[str, ...] = ()
    teams: tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckRun:
    """Information about one check run attached to a commit."""

    name: str
    status: str  # "queued", "in_progress", "completed"
    conclusion: str  # "success", "failure", "neutral", ... ("" while not completed)
    url: str = ""


@dataclass(frozen=True)
class PullRequestListing:
    """A pull request row from the author search."""

    number: int
    title: str
    state: str
    url: str


@dataclass(frozen=True)
class MergeOptions:
    """Flags passed to gh pr merge."""

    squash: bool = True
    auto: bool = True
    delete_branch: bool = True

    def as_flags(self) -> list[str]:
        flags: list[str] = []
        if self.squash:
            flags.append("--squash")
        if self.auto:
            flags.append("--auto")
        if self.delete_branch:
            flags.append("--delete-branch")
        return flags


class GitHubFetchError(RuntimeError):
    """Raised when reading from GitHub fails.

    The watch loop treats this as transient: it reports the error and tries
    again on the next poll.
    """


class MalformedResponseError(GitHubFetchError):
    """Raised when GitHub returns a payload that does not match the expected shape."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Malformed response while trying to {operation}: {detail}")


class MutationError(RuntimeError):
    """Raised when marking ready or merging fails."""

