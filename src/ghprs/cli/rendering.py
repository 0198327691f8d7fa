"""Rendering of pull request status for the terminal."""

import click

from ghprs.core.evaluation import PullRequestEvaluation
from ghprs.core.github.types import CheckRun, PullRequestListing

_GREEN_STATES = frozenset({"success", "approved", "open"})
_RED_STATES = frozenset({"failure", "changes_requested", "closed"})
_YELLOW_STATES = frozenset(
    {
        "cancelled",
        "skipped",
        "neutral",
        "requested",
        "in_progress",
        "queued",
        "action_required",
        "timed_out",
    }
)

# Check rows sort by rank: failures first, successes last
_FAILURE_RANK = frozenset({"failure", "timed_out", "action_required"})


def color_state(state: str) -> str:
    """Color a state word the way reviewers scan for it: green good, red bad."""
    normalized = state.lower()
    if normalized in _GREEN_STATES:
        return click.style(state, fg="bright_green")
    if normalized in _RED_STATES:
        return click.style(state, fg="bright_red")
    if normalized in _YELLOW_STATES:
        return click.style(state, fg="yellow")
    return state


def check_display_state(run: CheckRun) -> str:
    """Conclusion once finished, status while still running."""
    return run.conclusion or run.status


def check_rank(state: str) -> int:
    normalized = state.lower()
    if normalized in _FAILURE_RANK:
        return 0
    if normalized == "success":
        return 2
    return 1


def sort_check_runs(runs: list[CheckRun]) -> list[CheckRun]:
    """Order check runs failures first, then in-between states, then successes, by name."""
    return sorted(runs, key=lambda run: (check_rank(check_display_state(run)), run.name))


def render_status(evaluation: PullRequestEvaluation) -> list[str]:
    """Build the status block for one pull request.

    Returns:
        Lines to print, already styled
    """
    snapshot = evaluation.snapshot
    lines = [
        f"#{snapshot.number} {snapshot.title} ({color_state(snapshot.state)})",
        f"Author: {snapshot.author}",
    ]

    lines.append("Reviewers:")
    for reviewer, verdict in evaluation.reviews.verdicts.items():
        lines.append(f"  - {reviewer} ({color_state(verdict)})")
    for team in evaluation.reviews.requested_teams:
        lines.append(f"  - Team: {team} ({color_state('requested')})")

    if evaluation.check_runs is not None:
        lines.append("GitHub Actions:")
        for run in sort_check_runs(evaluation.check_runs):
            lines.append(f"  - {run.name}: {color_state(check_display_state(run))}")

    return lines


def render_listing(listing: PullRequestListing) -> str:
    return f"#{listing.number} {listing.title} ({color_state(listing.state)})"
