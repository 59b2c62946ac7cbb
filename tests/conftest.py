"""Test configuration and fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.event import Issue, IssueEvent

RUNNER_ENV_VARS = (
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_PATH",
    "GITHUB_EVENT_NAME",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_SERVER_URL",
    "PROVIDER",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_MAX_TOKENS",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "LLM_TEMPERATURE",
    "HTTP_RETRIES",
    "HTTP_TIMEOUT_SECONDS",
    "TRIGGER_LABEL",
    "FALLBACK_BASE_BRANCH",
    "RUNNER_REPO_ROOT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep CI's own GITHUB_* variables and any local .env out of the tests."""
    for name in RUNNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        return self._payload


class FakeSession:
    """Stands in for requests.Session: replays queued responses, records calls."""

    def __init__(self, responses: list[FakeResponse]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        return self._responses.pop(0)

    def close(self) -> None:
        self.closed = True


class RecordingGitRunner:
    """Stands in for subprocess.run for git commands.

    `config` holds the values answered to `git config --get <key>`; keys that are
    absent answer with exit code 1, like git does. `failures` maps an argument
    prefix (e.g. ("push",)) to the (returncode, stderr) to answer with.
    """

    def __init__(
        self,
        *,
        config: dict[str, str] | None = None,
        failures: dict[tuple[str, ...], tuple[int, str]] | None = None,
        branch: str = "main",
    ) -> None:
        self.config = dict(config or {})
        self.failures = dict(failures or {})
        self.branch = branch
        self.commands: list[list[str]] = []

    def __call__(self, command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.commands.append(list(command))
        args = command[1:]

        for prefix, (code, stderr) in self.failures.items():
            if tuple(args[: len(prefix)]) == prefix:
                return subprocess.CompletedProcess(command, code, "", stderr)

        if args[:2] == ["config", "--get"]:
            value = self.config.get(args[2])
            if value is None:
                return subprocess.CompletedProcess(command, 1, "", "")
            return subprocess.CompletedProcess(command, 0, value + "\n", "")
        if args[:1] == ["config"]:
            self.config[args[1]] = args[2]
        if args[:2] == ["rev-parse", "--abbrev-ref"]:
            return subprocess.CompletedProcess(command, 0, self.branch + "\n", "")
        return subprocess.CompletedProcess(command, 0, "", "")

    def git_args(self) -> list[list[str]]:
        return [c[1:] for c in self.commands]


@pytest.fixture
def fake_session_cls() -> type[FakeSession]:
    return FakeSession


@pytest.fixture
def fake_response_cls() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def git_runner() -> RecordingGitRunner:
    return RecordingGitRunner()


@pytest.fixture
def git_runner_cls() -> type[RecordingGitRunner]:
    return RecordingGitRunner


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "checkout"
    root.mkdir()
    return root


@pytest.fixture
def settings(repo_root: Path) -> RunnerSettings:
    """Stub-provider settings for octo-org/octo-repo."""
    return RunnerSettings(
        _env_file=None,
        github_repository="octo-org/octo-repo",
        github_event_name="issues",
        github_token="test-token",
        repo_root=repo_root,
    )


@pytest.fixture
def issue() -> Issue:
    return Issue(
        number=42,
        title="Widget",
        body="Build a widget.\nMust support resize.",
        labels=("claude-code",),
    )


@pytest.fixture
def issue_event(issue: Issue) -> IssueEvent:
    return IssueEvent(name="issues", issue=issue, repository_full_name="octo-org/octo-repo")
