"""One issue run, from validation to the final issue comment.

The run is linear and single-shot::

    VALIDATING -> GENERATING -> WRITING -> PUBLISHING -> NOTIFYING -> DONE

Any exception before the end takes the failure path: it is logged, a failure
comment is attempted and the outcome is reported as failed. Partially written
artifacts or branches are left in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from claude_issue_runner.errors import EmptyIssueBodyError
from claude_issue_runner.llm.factory import LLMFactory
from claude_issue_runner.llm.provider import LLMProvider
from claude_issue_runner.runner.artifact import artifact_relpath, write_artifact
from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.event import Issue, IssueEvent
from claude_issue_runner.runner.git import GitPublisher, branch_name_for, commit_message_for
from claude_issue_runner.runner.github.client import GitHubClient
from claude_issue_runner.runner.http import RetryingHTTPClient
from claude_issue_runner.runner.notifier import Notifier, PullRequestOutcome
from claude_issue_runner.runner.workflow import RunState, RunTracker

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[RunnerSettings, RetryingHTTPClient | None], LLMProvider]
RunStatus = Literal["completed", "skipped", "failed"]


@dataclass(frozen=True, slots=True)
class RunContext:
    """Everything a run derives from settings and the event, computed once."""

    issue: Issue
    repository: str
    branch: str
    artifact_path: str
    repo_root: Path

    @staticmethod
    def build(settings: RunnerSettings, event: IssueEvent) -> RunContext:
        issue = event.issue or Issue(number=None, title="", body="")
        return RunContext(
            issue=issue,
            repository=settings.github_repository or event.repository_full_name,
            branch=branch_name_for(issue.number),
            artifact_path=artifact_relpath(issue.number),
            repo_root=settings.repo_root,
        )


@dataclass(frozen=True, slots=True)
class RunOutcome:
    status: RunStatus
    history: tuple[RunState, ...]
    artifact_path: Path | None = None
    branch: str | None = None
    base_branch: str | None = None
    pull_request: PullRequestOutcome | None = None
    error: str | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.status == "failed" else 0


class IssueRunner:
    def __init__(
        self,
        *,
        settings: RunnerSettings,
        event: IssueEvent,
        github: GitHubClient | None,
        git: GitPublisher,
        http: RetryingHTTPClient | None = None,
        provider_factory: ProviderFactory = LLMFactory.create,
    ) -> None:
        self._settings = settings
        self._event = event
        self._github = github
        self._git = git
        self._http = http
        self._provider_factory = provider_factory
        self.context = RunContext.build(settings, event)
        self._notifier = Notifier(
            github,
            repository=self.context.repository,
            server_url=settings.github_server_url,
        )

    def _label_gate_passes(self) -> bool:
        if not self._event.is_issues_event or self._event.issue is None:
            logger.warning(
                "No issues event detected. This command is intended to run in GitHub Actions "
                "for issues events.",
                extra={"event_name": self._event.name},
            )

        label = self._settings.trigger_label
        if self._event.is_issues_event and not self.context.issue.has_label(label):
            logger.info(f"Issue does not have {label} label. Exiting.")
            return False
        return True

    def _resolve_base_branch(self) -> str:
        fallback = self._settings.fallback_base_branch
        if self._github is None:
            logger.info(f"No GitHub client configured, using base branch '{fallback}'")
            return fallback
        try:
            return self._github.get_repository_default_branch()
        except Exception as e:
            logger.warning(f"Failed to fetch default branch, using '{fallback}': {e}")
            return fallback

    def _publish(self) -> str:
        ctx = self.context
        self._git.ensure_identity()
        self._git.checkout_branch(ctx.branch)
        self._git.stage(ctx.artifact_path)
        self._git.commit(commit_message_for(ctx.issue.number))
        base_branch = self._resolve_base_branch()
        self._git.push(ctx.branch)
        return base_branch

    def run(self) -> RunOutcome:
        ctx = self.context
        tracker = RunTracker()
        tracker.advance(RunState.VALIDATING)

        if not self._label_gate_passes():
            tracker.advance(RunState.DONE)
            return RunOutcome(status="skipped", history=tracker.history)

        artifact_path: Path | None = None
        try:
            if not ctx.issue.body:
                raise EmptyIssueBodyError()

            tracker.advance(RunState.GENERATING)
            provider = self._provider_factory(self._settings, self._http)
            content = provider.generate(ctx.issue.body)

            tracker.advance(RunState.WRITING)
            artifact_path = write_artifact(ctx.repo_root, ctx.issue, content)

            tracker.advance(RunState.PUBLISHING)
            base_branch = self._publish()

            tracker.advance(RunState.NOTIFYING)
            pull_request = self._notifier.open_pull_request(
                issue_number=ctx.issue.number,
                head=ctx.branch,
                base=base_branch,
                artifact_path=ctx.artifact_path,
                provider=provider.name,
                model=provider.model,
            )
            self._notifier.post_success_comment(
                issue_number=ctx.issue.number,
                artifact_path=ctx.artifact_path,
                provider=provider.name,
                pull_request=pull_request,
                base=base_branch,
                head=ctx.branch,
            )
            tracker.advance(RunState.DONE)
            return RunOutcome(
                status="completed",
                history=tracker.history,
                artifact_path=artifact_path,
                branch=ctx.branch,
                base_branch=base_branch,
                pull_request=pull_request,
            )

        except Exception as e:
            message = str(e) or type(e).__name__
            logger.exception(f"Error: {message}", extra={"state": tracker.state.value})
            tracker.advance(RunState.FAILED)
            tracker.advance(RunState.NOTIFY_FAILURE)
            self._notifier.post_failure_comment(issue_number=ctx.issue.number, message=message)
            tracker.advance(RunState.DONE)
            return RunOutcome(
                status="failed",
                history=tracker.history,
                artifact_path=artifact_path,
                branch=ctx.branch,
                error=message,
            )
