"""Tests for operator command parsing."""

from ghprs.cli.commands.status.operator_commands import OperatorCommand, parse_operator_command


def test_recognized_commands_ignore_case_and_whitespace() -> None:
    assert parse_operator_command("merge") == OperatorCommand.MERGE
    assert parse_operator_command("  MERGE \n") == OperatorCommand.MERGE
    assert parse_operator_command("Ready") == OperatorCommand.READY


def test_anything_else_is_noop() -> None:
    assert parse_operator_command("") == OperatorCommand.NOOP
    assert parse_operator_command("merge now") == OperatorCommand.NOOP
    assert parse_operator_command("quit") == OperatorCommand.NOOP
