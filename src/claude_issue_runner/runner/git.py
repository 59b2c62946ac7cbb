"""Git operations used to publish the artifact on a branch.

Every command runs in the checkout root and fails loudly: a non-zero exit
raises `GitCommandError` and aborts the rest of the sequence.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Callable
from pathlib import Path

from claude_issue_runner.errors import GitCommandError

logger = logging.getLogger(__name__)

BOT_EMAIL = "github-actions[bot]@users.noreply.github.com"
BOT_NAME = "github-actions[bot]"

CommandRunner = Callable[..., subprocess.CompletedProcess[str]]


def branch_name_for(issue_number: int | None, *, now_ms: int | None = None) -> str:
    if issue_number is not None:
        return f"issue-{issue_number}-claude"
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"issue-unknown-claude-{now_ms}"


def commit_message_for(issue_number: int | None) -> str:
    return f"chore(claude): artifacts for issue #{issue_number}"


class GitPublisher:
    """Branch, commit and push in a local checkout this process owns for the run."""

    def __init__(self, repo_root: Path, *, runner: CommandRunner = subprocess.run) -> None:
        self._repo_root = repo_root
        self._runner = runner

    def _git(self, *args: str) -> str:
        command = ["git", *args]
        logger.debug("Running git command", extra={"command": command})
        try:
            result = self._runner(
                command,
                cwd=self._repo_root,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitCommandError(command, None, str(e)) from e

        if result.returncode != 0:
            raise GitCommandError(command, result.returncode, result.stderr or "")
        return result.stdout or ""

    def _config_value(self, key: str) -> str | None:
        # Any lookup failure counts as "not configured".
        try:
            value = self._git("config", "--get", key).strip()
        except GitCommandError:
            return None
        return value or None

    def ensure_identity(self) -> None:
        """Set the bot identity for whichever of user.email/user.name is missing."""

        if self._config_value("user.email") is None:
            self._git("config", "user.email", BOT_EMAIL)
            logger.info("Configured default git user.email", extra={"user_email": BOT_EMAIL})
        if self._config_value("user.name") is None:
            self._git("config", "user.name", BOT_NAME)
            logger.info("Configured default git user.name", extra={"user_name": BOT_NAME})

    def current_branch(self) -> str:
        try:
            return self._git("rev-parse", "--abbrev-ref", "HEAD").strip()
        except GitCommandError:
            return ""

    def checkout_branch(self, name: str) -> None:
        """Create the branch, or reset it to the current commit if it exists."""

        previous = self.current_branch()
        self._git("checkout", "-B", name)
        logger.info(f"Checked out branch {name}", extra={"from_branch": previous})

    def stage(self, path: str) -> None:
        # -f: artifacts/ may be listed in .gitignore
        self._git("add", "-f", path)

    def commit(self, message: str) -> None:
        self._git("commit", "-m", message)
        logger.info("Committed artifact", extra={"commit_message": message})

    def push(self, branch: str, remote: str = "origin") -> None:
        self._git("push", "-u", remote, branch)
        logger.info(f"Pushed branch {branch}", extra={"remote": remote})
