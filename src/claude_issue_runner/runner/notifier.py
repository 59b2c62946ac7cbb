"""Reporting a run back to GitHub: the pull request and the issue comment.

Everything here is best effort. Pull request creation degrades to a manual
compare link, and comment failures are logged and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

from claude_issue_runner.runner.github.client import GitHubClient, split_repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PullRequestOpened:
    number: int
    url: str


@dataclass(frozen=True, slots=True)
class PullRequestSkipped:
    reason: str


PullRequestOutcome = PullRequestOpened | PullRequestSkipped


def pull_request_title(issue_number: int | None) -> str:
    return f"chore(claude): add artifacts for issue #{issue_number}"


def pull_request_body(
    *, issue_number: int | None, artifact_path: str, provider: str, model: str
) -> str:
    return (
        f"This PR adds generated artifacts for issue #{issue_number}.\n\n"
        f"- Artifact: `{artifact_path}`\n"
        f"- Provider: `{provider}`\n"
        f"- Model: `{model}`"
    )


def success_comment(
    *, artifact_path: str, provider: str, pull_request: PullRequestOutcome, compare_url: str
) -> str:
    body = f"Completed. Generated artifacts saved to `{artifact_path}`.\nProvider=`{provider}`"
    if isinstance(pull_request, PullRequestOpened):
        return body + f"\nOpened PR: {pull_request.url}"
    return body + f"\nPR creation skipped. Open manually: {compare_url}"


def failure_comment(message: str) -> str:
    return f"Failed to complete Claude run. Error: `{message}`"


class Notifier:
    """Opens the pull request and posts the single status comment for a run.

    With no GitHub client (no token or no repository slug) every operation is
    skipped and logged.
    """

    def __init__(
        self,
        github: GitHubClient | None,
        *,
        repository: str,
        server_url: str = "https://github.com",
    ) -> None:
        self._github = github
        self._owner, self._repo = split_repository(repository)
        self._server_url = server_url.rstrip("/")

    @property
    def has_repository(self) -> bool:
        return bool(self._owner and self._repo)

    def compare_url(self, *, base: str, head: str) -> str:
        return (
            f"{self._server_url}/{self._owner}/{self._repo}/compare/"
            f"{quote(base, safe='')}...{quote(head, safe='')}?expand=1"
        )

    def open_pull_request(
        self,
        *,
        issue_number: int | None,
        head: str,
        base: str,
        artifact_path: str,
        provider: str,
        model: str,
    ) -> PullRequestOutcome:
        if self._github is None or not self.has_repository:
            logger.info("PR creation skipped: no GitHub client or repository configured")
            return PullRequestSkipped(reason="no GitHub client or repository configured")

        try:
            created = self._github.create_pull_request(
                title=pull_request_title(issue_number),
                body=pull_request_body(
                    issue_number=issue_number,
                    artifact_path=artifact_path,
                    provider=provider,
                    model=model,
                ),
                head=head,
                base=base,
            )
        except Exception as e:
            logger.warning(f"PR creation skipped: {e}", extra={"head": head, "base": base})
            return PullRequestSkipped(reason=str(e))

        url = created.url or f"{self._server_url}/{self._owner}/{self._repo}/pull/{created.number}"
        logger.info(f"Created PR: {url}", extra={"pull_number": created.number})
        return PullRequestOpened(number=created.number, url=url)

    def _comment(self, issue_number: int | None, body: str) -> bool:
        if self._github is None or not self.has_repository or issue_number is None:
            logger.info("Issue comment skipped: missing GitHub client, repository or issue")
            return False
        try:
            self._github.create_issue_comment(issue_number=issue_number, body=body)
        except Exception as e:
            logger.error(f"Failed to post comment: {e}", extra={"issue_number": issue_number})
            return False
        return True

    def post_success_comment(
        self,
        *,
        issue_number: int | None,
        artifact_path: str,
        provider: str,
        pull_request: PullRequestOutcome,
        base: str,
        head: str,
    ) -> bool:
        body = success_comment(
            artifact_path=artifact_path,
            provider=provider,
            pull_request=pull_request,
            compare_url=self.compare_url(base=base, head=head),
        )
        return self._comment(issue_number, body)

    def post_failure_comment(self, *, issue_number: int | None, message: str) -> bool:
        return self._comment(issue_number, failure_comment(message))
