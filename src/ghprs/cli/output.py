"""Output utilities for CLI commands.

Everything a person reads goes to stderr so stdout stays free for the OSC 9
terminal banner.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output informational message for human users (routed to stderr)."""
    click.echo(message, err=True, nl=nl)
