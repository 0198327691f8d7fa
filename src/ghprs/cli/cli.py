import logging
import os

import click

from ghprs.cli.commands.status.command import status_cmd
from ghprs.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ghprs")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Watch GitHub pull requests and merge them when they are ready."""
    # Enable debug logging if GHPRS_DEBUG environment variable is set
    if os.getenv("GHPRS_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=False)


cli.add_command(status_cmd)


def main() -> None:
    """CLI entry point used by the `ghprs` console script."""
    cli()
