"""Tests for DryRunGitHub."""

import pytest

from ghprs.core.github.dry_run import DryRunGitHub
from ghprs.core.github.fake import FakeGitHub
from ghprs.core.github.types import MergeOptions
from tests.test_utils.builders import make_snapshot


def test_reads_are_delegated() -> None:
    fake = FakeGitHub(pull_requests={42: make_snapshot(title="Delegated")})

    snapshot = DryRunGitHub(fake).get_pull_request("octo/widgets", 42)

    assert snapshot.title == "Delegated"
    assert fake.get_pull_request_calls == [("octo/widgets", 42)]


def test_merge_prints_command_without_merging(capsys: pytest.CaptureFixture[str]) -> None:
    fake = FakeGitHub()

    DryRunGitHub(fake).merge_pr("octo/widgets", 42, MergeOptions())

    assert fake.merged_prs == []
    captured = capsys.readouterr()
    assert (
        "[DRY RUN] Would run: gh pr merge 42 --repo octo/widgets --squash --auto --delete-branch"
        in captured.err
    )


def test_mark_ready_prints_command_without_marking(capsys: pytest.CaptureFixture[str]) -> None:
    fake = FakeGitHub()

    DryRunGitHub(fake).mark_ready("octo/widgets", 42)

    assert fake.marked_ready == []
    assert "[DRY RUN] Would run: gh pr ready 42 --repo octo/widgets" in capsys.readouterr().err
