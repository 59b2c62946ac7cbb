"""GitHub API client wrapper.

This wraps PyGithub to keep GitHub calls out of the orchestration code and make
tests easy. The repository object is fetched lazily so that constructing the
client never touches the network.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Auth, Github
from github.Repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PullRequestCreated:
    number: int
    url: str | None


def split_repository(repository: str) -> tuple[str, str]:
    """Split 'owner/repo' into its parts; missing parts are empty strings."""

    owner, _, name = repository.strip().strip("/").partition("/")
    return owner, name.strip("/")


class GitHubClient:
    """Small wrapper around PyGithub for the operations a run needs."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        owner, name = split_repository(repository)
        if not owner or not name:
            raise ValueError("GitHub repository is required in the form 'owner/repo'")

        self._repository_name = f"{owner}/{name}"
        self._repo = repo

        if repo is not None:
            self._github = github_api
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url.rstrip("/"))

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def _get_repo(self) -> Repository:
        if self._repo is None:
            if self._github is None:
                raise ValueError("No GitHub API client configured")
            self._repo = self._github.get_repo(self._repository_name)
            logger.info("Connected to repository", extra={"repo": self._repository_name})
        return self._repo

    def get_repository_default_branch(self) -> str:
        default_branch = self._get_repo().default_branch
        if not isinstance(default_branch, str) or not default_branch.strip():
            raise ValueError("Repository response has no default branch")
        return default_branch

    def create_pull_request(
        self,
        *,
        title: str,
        body: str,
        head: str,
        base: str,
    ) -> PullRequestCreated:
        logger.info(f"Creating pull request: {title}", extra={"head": head, "base": base})

        pr = self._get_repo().create_pull(title=title, body=body, head=head, base=base)

        html_url = pr.html_url if isinstance(pr.html_url, str) and pr.html_url.strip() else None
        logger.info(f"Pull request created: #{pr.number}")
        return PullRequestCreated(number=pr.number, url=html_url)

    def create_issue_comment(self, *, issue_number: int, body: str) -> None:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        issue = self._get_repo().get_issue(issue_number)
        issue.create_comment(body)
        logger.info(f"Commented on issue #{issue_number}")

    def close(self) -> None:
        """Close the GitHub client connection."""
        if self._github is not None:
            self._github.close()
