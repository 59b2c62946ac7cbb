"""Unit tests for the PyGithub wrapper.

A Repository instance is injected so no network calls happen.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from claude_issue_runner.runner.github.client import (
    GitHubClient,
    PullRequestCreated,
    split_repository,
)


def _client(repo: Mock) -> GitHubClient:
    return GitHubClient(token="test-token", repository="octo-org/octo-repo/", repo=repo)


def test_split_repository() -> None:
    assert split_repository("octo-org/octo-repo") == ("octo-org", "octo-repo")
    assert split_repository("/octo-org/octo-repo/") == ("octo-org", "octo-repo")
    assert split_repository("") == ("", "")


def test_client_requires_token_and_repository() -> None:
    with pytest.raises(ValueError, match="token"):
        GitHubClient(token="", repository="octo-org/octo-repo", repo=Mock())
    with pytest.raises(ValueError, match="repository"):
        GitHubClient(token="t", repository="octo-org", repo=Mock())


def test_repository_name_is_normalized() -> None:
    assert _client(Mock()).repository == "octo-org/octo-repo"


def test_default_branch() -> None:
    repo = Mock()
    repo.default_branch = "trunk"

    assert _client(repo).get_repository_default_branch() == "trunk"


def test_blank_default_branch_is_an_error() -> None:
    repo = Mock()
    repo.default_branch = ""

    with pytest.raises(ValueError):
        _client(repo).get_repository_default_branch()


def test_create_pull_request() -> None:
    repo = Mock()
    repo.create_pull.return_value = Mock(number=7, html_url="https://github.com/o/r/pull/7")

    created = _client(repo).create_pull_request(
        title="chore(claude): add artifacts for issue #42",
        body="body",
        head="issue-42-claude",
        base="main",
    )

    assert created == PullRequestCreated(number=7, url="https://github.com/o/r/pull/7")
    repo.create_pull.assert_called_once_with(
        title="chore(claude): add artifacts for issue #42",
        body="body",
        head="issue-42-claude",
        base="main",
    )


def test_create_issue_comment() -> None:
    repo = Mock()

    _client(repo).create_issue_comment(issue_number=42, body="hello")

    repo.get_issue.assert_called_once_with(42)
    repo.get_issue.return_value.create_comment.assert_called_once_with("hello")


def test_create_issue_comment_rejects_invalid_number() -> None:
    with pytest.raises(ValueError):
        _client(Mock()).create_issue_comment(issue_number=0, body="hello")


def test_repository_is_fetched_lazily() -> None:
    github_api = Mock()
    github_api.get_repo.return_value = Mock(default_branch="main")

    client = GitHubClient(
        token="test-token", repository="octo-org/octo-repo", github_api=github_api
    )
    github_api.get_repo.assert_not_called()

    assert client.get_repository_default_branch() == "main"
    github_api.get_repo.assert_called_once_with("octo-org/octo-repo")

    client.close()
    github_api.close.assert_called_once()
