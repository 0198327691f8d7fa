"""Tests for the top-level command group."""

from click.testing import CliRunner

from ghprs.cli.cli import cli
from ghprs.core.context import GhprsContext


def test_help_lists_status() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["-h"], obj=GhprsContext.for_test())

    assert result.exit_code == 0
    assert "status" in result.output


def test_status_help_documents_operator_commands() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["status", "--help"], obj=GhprsContext.for_test())

    assert result.exit_code == 0
    assert "--watch" in result.output
    assert "--dry-run" in result.output
    assert "merge" in result.output
