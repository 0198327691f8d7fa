"""GitHub credential lookup.

The token comes from an environment variable first (GH_TOKEN unless
configured otherwise) and falls back to asking the gh CLI. Nothing here
talks to the GitHub API itself.
"""

import logging
import os
from abc import ABC, abstractmethod

from ghprs.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV_VAR = "GH_TOKEN"


class Credentials(ABC):
    """Abstract source of a GitHub token."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Return a token, or None when no credential is available."""
        ...


class RealCredentials(Credentials):
    """Production implementation: environment variable, then `gh auth token`.

    The first successful lookup is cached for the life of the process.
    """

    def __init__(self, env_var: str = DEFAULT_TOKEN_ENV_VAR) -> None:
        self._env_var = env_var
        self._token: str | None = None

    def get_token(self) -> str | None:
        if self._token is not None:
            return self._token

        token = os.environ.get(self._env_var, "").strip()
        if token:
            logger.debug("Using token from $%s", self._env_var)
            self._token = token
            return token

        # Missing or logged-out gh is not an error here: it just means no credential
        try:
            result = run_subprocess_with_context(
                ["gh", "auth", "token"],
                operation_context="read token from gh auth token",
            )
        except RuntimeError as e:
            logger.debug("No fallback credential: %s", e)
            return None

        token = result.stdout.strip()
        if not token:
            return None
        logger.debug("Using token from gh auth token")
        self._token = token
        return token


class FakeCredentials(Credentials):
    """In-memory fake returning a fixed token (or None)."""

    def __init__(self, *, token: str | None = "test-token") -> None:
        self._token = token
        self._get_token_calls = 0

    @property
    def get_token_calls(self) -> int:
        """Number of get_token() calls, for test assertions."""
        return self._get_token_calls

    def get_token(self) -> str | None:
        self._get_token_calls += 1
        return self._token
