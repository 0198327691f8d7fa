"""Application context with dependency injection."""

from dataclasses import dataclass

import click

from ghprs.cli.output import user_output
from ghprs.core.config_store import ConfigStore, GlobalConfig, RealConfigStore
from ghprs.core.credentials import Credentials, RealCredentials
from ghprs.core.github.abc import GitHub
from ghprs.core.github.dry_run import DryRunGitHub
from ghprs.core.github.real import RealGitHub
from ghprs.core.notifier import Notifier, RealNotifier
from ghprs.core.operator_input import OperatorInput, StdinOperatorInput
from ghprs.core.time import RealTime, Time
from ghprs.core.user_feedback import InteractiveFeedback, UserFeedback


@dataclass(frozen=True)
class GhprsContext:
    """Immutable context holding all dependencies for ghprs operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    github: GitHub
    credentials: Credentials
    notifier: Notifier
    operator_input: OperatorInput
    time: Time
    feedback: UserFeedback
    global_config: GlobalConfig
    dry_run: bool

    @staticmethod
    def for_test(
        github: GitHub | None = None,
        credentials: Credentials | None = None,
        notifier: Notifier | None = None,
        operator_input: OperatorInput | None = None,
        time: Time | None = None,
        feedback: UserFeedback | None = None,
        global_config: GlobalConfig | None = None,
        dry_run: bool = False,
    ) -> "GhprsContext":
        """Create test context with optional pre-configured integration classes.

        Any dependency left as None is replaced by an empty fake.

        Example:
            >>> github = FakeGitHub(pull_requests={7: snapshot})
            >>> ctx = GhprsContext.for_test(github=github)
        """
        from tests.fakes.user_feedback import FakeUserFeedback

        from ghprs.core.credentials import FakeCredentials
        from ghprs.core.github.fake import FakeGitHub
        from ghprs.core.notifier import FakeNotifier
        from ghprs.core.operator_input import FakeOperatorInput
        from ghprs.core.time import FakeTime

        if github is None:
            github = FakeGitHub()

        if credentials is None:
            credentials = FakeCredentials()

        if notifier is None:
            notifier = FakeNotifier()

        if operator_input is None:
            operator_input = FakeOperatorInput()

        if time is None:
            time = FakeTime()

        if feedback is None:
            feedback = FakeUserFeedback()

        if global_config is None:
            global_config = GlobalConfig.default()

        # Apply dry-run wrapper if needed (matching production behavior)
        if dry_run:
            github = DryRunGitHub(github)

        return GhprsContext(
            github=github,
            credentials=credentials,
            notifier=notifier,
            operator_input=operator_input,
            time=time,
            feedback=feedback,
            global_config=global_config,
            dry_run=dry_run,
        )


def load_global_config(config_store: ConfigStore) -> GlobalConfig:
    """Load global config, exiting with a styled error when it is malformed."""
    try:
        return config_store.load()
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None


def create_context(*, dry_run: bool) -> GhprsContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution. Nothing here touches the network: the credential is
    only looked up when a command first needs it.

    Args:
        dry_run: If True, wrap GitHub in a dry-run wrapper that prints
                 mutations without executing them

    Returns:
        GhprsContext with real implementations
    """
    # 1. Load global config (no deps)
    global_config = load_global_config(RealConfigStore())

    # 2. Create integration classes
    credentials = RealCredentials(env_var=global_config.token_env_var)
    github: GitHub = RealGitHub(credentials)
    notifier = RealNotifier(
        desktop=global_config.desktop_notifications,
        terminal=global_config.terminal_notifications,
    )

    # 3. Apply dry-run wrapper if needed
    if dry_run:
        github = DryRunGitHub(github)

    return GhprsContext(
        github=github,
        credentials=credentials,
        notifier=notifier,
        operator_input=StdinOperatorInput(),
        time=RealTime(),
        feedback=InteractiveFeedback(),
        global_config=global_config,
        dry_run=dry_run,
    )
