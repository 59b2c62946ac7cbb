"""Exceptions raised by a runner invocation.

Every error here is fatal for the run: the orchestrator catches it, reports it
on the originating issue and exits non-zero.
"""

from __future__ import annotations


class RunnerError(Exception):
    """Base class for run failures."""


class MissingCredentialError(RunnerError, ValueError):
    """Raised when the selected provider has no API key configured."""


class EmptyIssueBodyError(RunnerError):
    def __init__(self) -> None:
        super().__init__("Issue body is empty")


class ProviderHTTPError(RunnerError):
    """A non-2xx response from a provider endpoint."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class EmptyProviderOutputError(RunnerError):
    """Raised when a provider answered but produced no text."""


class GitCommandError(RunnerError):
    def __init__(self, command: list[str], returncode: int | None, stderr: str) -> None:
        detail = stderr.strip() or "no output"
        super().__init__(f"{' '.join(command)} failed (exit {returncode}): {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
