"""User-facing diagnostic output."""

from abc import ABC, abstractmethod

import click

from ghprs.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing output for the status and watch flows.

    Functions call ctx.feedback methods instead of printing directly so tests
    can capture exactly what the operator would have seen.

    Usage:
        ctx.feedback.info("Reviewers:")
        ctx.feedback.success("✅ Squash merge completed successfully!")
        ctx.feedback.error("❌ Merge failed: ...")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show warning message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show error message."""

    @abstractmethod
    def clear_screen(self) -> None:
        """Clear the terminal before a full redraw."""


class InteractiveFeedback(UserFeedback):
    """Feedback written to the terminal."""

    def info(self, message: str) -> None:
        """Show informational message."""
        user_output(message)

    def success(self, message: str) -> None:
        """Show success message in green."""
        user_output(click.style(message, fg="bright_green"))

    def warning(self, message: str) -> None:
        """Show warning message in yellow."""
        user_output(click.style(message, fg="yellow"))

    def error(self, message: str) -> None:
        """Show error message in red."""
        user_output(click.style(message, fg="bright_red"))

    def clear_screen(self) -> None:
        click.clear()
