"""CLI command entry point for status."""

import dataclasses
import logging

import click

from ghprs.cli.commands.status.watch_loop import WatchLoop, WatchSession
from ghprs.cli.ensure import Ensure
from ghprs.cli.rendering import render_listing
from ghprs.core.context import GhprsContext
from ghprs.core.github.dry_run import DryRunGitHub
from ghprs.core.github.types import GitHubFetchError

logger = logging.getLogger(__name__)


def _list_authored(ctx: GhprsContext, repo: str, author: str) -> None:
    try:
        listings = ctx.github.search_pull_requests(repo, author)
    except GitHubFetchError as e:
        ctx.feedback.error(f"error: {e}")
        return

    if not listings:
        ctx.feedback.info(f"No pull requests by {author} in {repo}")
        return

    for listing in listings:
        ctx.feedback.info(render_listing(listing))


@click.command("status")
@click.argument("repo_arg", metavar="REPO", required=False)
@click.option("--repo", "repo_option", help="owner/repo (overrides positional)")
@click.option("--pr", "pr_number", type=click.IntRange(min=1), help="Pull request number.")
@click.option("--author", help="List open and closed pull requests by this login.")
@click.option(
    "--watch",
    is_flag=True,
    help="Refresh every poll interval, notify when merge-ready, and accept 'merge'/'ready'.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the gh commands a merge or mark-ready would run without executing them.",
)
@click.pass_obj
def status_cmd(
    ctx: GhprsContext,
    repo_arg: str | None,
    repo_option: str | None,
    pr_number: int | None,
    author: str | None,
    watch: bool,
    dry_run: bool,
) -> None:
    """Show pull request status by number, or list pull requests by author.

    With --pr, prints the pull request's state, reviewers and check runs and
    whether it is ready to merge. With --watch the status is refreshed on an
    interval, a notification fires when the pull request becomes ready, and
    the following commands are read from stdin:

    \b
      merge   squash-merge (auto, deleting the branch) if ready right now
      ready   mark a draft pull request as ready for review

    --pr takes priority over --author when both are given.

    Example:
        ghprs status octo/widgets --pr 42 --watch
    """
    logger.debug(
        "Command invoked: status(repo_arg=%s, repo_option=%s, pr=%s, author=%s, "
        "watch=%s, dry_run=%s)",
        repo_arg,
        repo_option,
        pr_number,
        author,
        watch,
        dry_run,
    )

    repo = Ensure.truthy(repo_option or repo_arg, "Repository is required (owner/name)")
    Ensure.repo_slug(repo)
    Ensure.invariant(
        pr_number is not None or bool(author),
        "Specify --pr NUMBER or --author LOGIN",
    )
    Ensure.not_none(
        ctx.credentials.get_token(),
        f"missing {ctx.global_config.token_env_var} and no gh auth token available",
    )

    if dry_run and not ctx.dry_run:
        ctx = dataclasses.replace(ctx, github=DryRunGitHub(ctx.github), dry_run=True)

    if pr_number is None:
        if watch:
            logger.debug("--watch ignored for author listing")
        _list_authored(ctx, repo, author or "")
        return

    session = WatchSession(repo=repo, pr_number=pr_number, watch=watch)
    WatchLoop(ctx, session).run()
