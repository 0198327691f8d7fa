"""Production implementation of GitHub operations."""

import logging
import os
from urllib.parse import quote

from ghprs.core.credentials import Credentials
from ghprs.core.github.abc import GitHub
from ghprs.core.github.parsing import (
    parse_check_runs,
    parse_pull_request,
    parse_requested_reviewers,
    parse_reviews,
    parse_search_results,
)
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
from ghprs.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

# Largest page GitHub serves; reviews and check runs are read across all pages
PER_PAGE = 100


class RealGitHub(GitHub):
    """Production implementation using the gh CLI.

    Reads go through `gh api` against the REST endpoints; mutations use the
    `gh pr` porcelain. The resolved token is handed to gh through GH_TOKEN so
    the same credential is used whether it came from the environment or from
    gh itself.
    """

    def __init__(self, credentials: Credentials):
        """Initialize RealGitHub.

        Args:
            credentials: Token source, consulted lazily on the first call
        """
        self._credentials = credentials

    def _gh_env(self) -> dict[str, str]:
        env = dict(os.environ)
        token = self._credentials.get_token()
        if token is not None:
            env["GH_TOKEN"] = token
        return env

    def _api_get(self, path: str, operation: str, *flags: str) -> str:
        """Run `gh api [flags] <path>` and return stdout.

        With --paginate gh follows every page; array pages are joined into one
        array, and --slurp wraps object pages in an outer array.

        Raises:
            GitHubFetchError: If gh fails or is not installed
        """
        cmd = ["gh", "api", *flags, "-H", "Accept: application/vnd.github+json", path]
        try:
            result = run_subprocess_with_context(cmd, operation, env=self._gh_env())
        except RuntimeError as e:
            raise GitHubFetchError(str(e)) from e
        return result.stdout

    def get_pull_request(self, repo: str, pr_number: int) -> RequestSnapshot:
        stdout = self._api_get(
            f"repos/{repo}/pulls/{pr_number}",
            f"read pull request #{pr_number} in {repo}",
        )
        return parse_pull_request(stdout)

    def get_reviews(self, repo: str, pr_number: int) -> list[ReviewSubmission]:
        stdout = self._api_get(
            f"repos/{repo}/pulls/{pr_number}/reviews?per_page={PER_PAGE}",
            f"read reviews for #{pr_number} in {repo}",
            "--paginate",
        )
        return parse_reviews(stdout)

    def get_requested_reviewers(self, repo: str, pr_number: int) -> RequestedReviewers:
        stdout = self._api_get(
            f"repos/{repo}/pulls/{pr_number}/requested_reviewers",
            f"read requested reviewers for #{pr_number} in {repo}",
        )
        return parse_requested_reviewers(stdout)

    def get_check_runs(self, repo: str, sha: str) -> list[CheckRun]:
        stdout = self._api_get(
            f"repos/{repo}/commits/{sha}/check-runs?per_page={PER_PAGE}",
            f"read check runs for {sha[:7]} in {repo}",
            "--paginate",
            "--slurp",
        )
        return parse_check_runs(stdout)

    def search_pull_requests(self, repo: str, author: str) -> list[PullRequestListing]:
        query = quote(f"repo:{repo} is:pr author:{author}")
        stdout = self._api_get(
            f"search/issues?q={query}",
            f"search pull requests by {author} in {repo}",
        )
        return parse_search_results(stdout)

    def mark_ready(self, repo: str, pr_number: int) -> None:
        """Mark a draft pull request ready via `gh pr ready`."""
        cmd = ["gh", "pr", "ready", str(pr_number), "--repo", repo]
        try:
            run_subprocess_with_context(
                cmd,
                operation_context=f"mark PR #{pr_number} ready for review",
                env=self._gh_env(),
            )
        except RuntimeError as e:
            raise MutationError(str(e)) from e

    def merge_pr(self, repo: str, pr_number: int, options: MergeOptions) -> None:
        """Merge a pull request via `gh pr merge`."""
        cmd = ["gh", "pr", "merge", str(pr_number), "--repo", repo, *options.as_flags()]
        try:
            result = run_subprocess_with_context(
                cmd,
                operation_context=f"merge PR #{pr_number}",
                env=self._gh_env(),
            )
        except RuntimeError as e:
            raise MutationError(str(e)) from e

        if result.stdout.strip():
            logger.debug("gh pr merge: %s", result.stdout.strip())
