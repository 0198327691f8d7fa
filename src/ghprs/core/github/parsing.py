"""Parsing of GitHub REST payloads into domain types.

Payload shapes are declared as pydantic models so that anything GitHub (or a
proxy in between) sends back in an unexpected shape is rejected in one place
and reported as MalformedResponseError rather than a KeyError deep inside the
watch loop.
"""

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ghprs.core.github.types import (
    CheckRun,
    MalformedResponseError,
    PullRequestListing,
    RequestedReviewers,
    RequestSnapshot,
    ReviewSubmission,
)

# GitHub substitutes this login for deleted accounts
GHOST_LOGIN = "ghost"


class UserPayload(BaseModel):
    login: str


class TeamPayload(BaseModel):
    name: str


class HeadPayload(BaseModel):
    sha: str


class PullRequestPayload(BaseModel):
    number: int
    title: str = ""
    state: str
    draft: bool = False
    html_url: str = ""
    mergeable: bool | None = None
    mergeable_state: str | None = None
    user: UserPayload | None = None
    head: HeadPayload


class ReviewPayload(BaseModel):
    user: UserPayload | None = None
    state: str


class RequestedReviewersPayload(BaseModel):
    users: list[UserPayload] = Field(default_factory=list)
    teams: list[TeamPayload] = Field(default_factory=list)


class CheckRunPayload(BaseModel):
    name: str
    status: str
    conclusion: str | None = None
    html_url: str | None = None


class CheckRunsPayload(BaseModel):
    total_count: int | None = None
    check_runs: list[CheckRunPayload]


class SearchItemPayload(BaseModel):
    number: int
    title: str = ""
    state: str
    html_url: str = ""


class SearchPayload(BaseModel):
    items: list[SearchItemPayload] = Field(default_factory=list)


_REVIEWS_ADAPTER = TypeAdapter(list[ReviewPayload])
# One envelope, or every page of a `gh api --paginate --slurp` read
_CHECK_RUN_PAGES_ADAPTER = TypeAdapter(list[CheckRunsPayload] | CheckRunsPayload)


def _first_error(error: ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


def parse_pull_request(stdout: str) -> RequestSnapshot:
    """Parse `gh api repos/{repo}/pulls/{number}` output.

    A missing or null mergeable_state is reported as "unknown".

    Raises:
        MalformedResponseError: If the payload does not match the expected shape
    """
    try:
        payload = PullRequestPayload.model_validate_json(stdout)
    except ValidationError as e:
        raise MalformedResponseError("read pull request", _first_error(e)) from e

    return RequestSnapshot(
        number=payload.number,
        title=payload.title,
        state=payload.state.lower(),
        is_draft=payload.draft,
        head_sha=payload.head.sha,
        mergeable_state=(payload.mergeable_state or "unknown").lower(),
        mergeable=payload.mergeable,
        url=payload.html_url,
        author=payload.user.login if payload.user is not None else GHOST_LOGIN,
    )


def parse_reviews(stdout: str) -> list[ReviewSubmission]:
    """Parse the reviews list, preserving GitHub's chronological order.

    Raises:
        MalformedResponseError: If the payload does not match the expected shape
    """
    try:
        payloads = _REVIEWS_ADAPTER.validate_json(stdout)
    except ValidationError as e:
        raise MalformedResponseError("read reviews", _first_error(e)) from e

    return [
        ReviewSubmission(
            reviewer=review.user.login if review.user is not None else GHOST_LOGIN,
            verdict=review.state.upper(),
        )
        for review in payloads
    ]


def parse_requested_reviewers(stdout: str) -> RequestedReviewers:
    """Parse the requested_reviewers object into user and team names.

    Raises:
        MalformedResponseError: If the payload does not match the expected shape
    """
    try:
        payload = RequestedReviewersPayload.model_validate_json(stdout)
    except ValidationError as e:
        raise MalformedResponseError("read requested reviewers", _first_error(e)) from e

    return RequestedReviewers(
        users=tuple(user.login for user in payload.users),
        teams=tuple(team.name for team in payload.teams),
    )


def parse_check_runs(stdout: str) -> list[CheckRun]:
    """Parse the check-runs envelope for a commit, or a list of paged envelopes.

    A null conclusion (run not finished) becomes the empty string.

    Raises:
        MalformedResponseError: If the payload does not match the expected shape, or
            holds fewer runs than GitHub's total_count (an unseen run may be failing)
    """
    try:
        parsed = _CHECK_RUN_PAGES_ADAPTER.validate_json(stdout)
    except ValidationError as e:
        raise MalformedResponseError("read check runs", _first_error(e)) from e

    pages = parsed if isinstance(parsed, list) else [parsed]
    runs = [run for page in pages for run in page.check_runs]
    expected = max((page.total_count or 0 for page in pages), default=0)
    if expected > len(runs):
        raise MalformedResponseError(
            "read check runs", f"total_count is {expected} but only {len(runs)} were returned"
        )

    return [
        CheckRun(
            name=run.name,
            status=run.status.lower(),
            conclusion=(run.conclusion or "").lower(),
            url=run.html_url or "",
        )
        for run in runs
    ]


def parse_search_results(stdout: str) -> list[PullRequestListing]:
    """Parse `gh api search/issues` output into listing rows.

    Raises:
        MalformedResponseError: If the payload does not match the expected shape
    """
    try:
        payload = SearchPayload.model_validate_json(stdout)
    except ValidationError as e:
        raise MalformedResponseError("search pull requests", _first_error(e)) from e

    return [
        PullRequestListing(
            number=item.number,
            title=item.title,
            state=item.state.lower(),
            url=item.html_url,
        )
        for item in payload.items
    ]
