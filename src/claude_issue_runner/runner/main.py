"""CLI entrypoint: run once for the issue event GitHub Actions handed us.

Exit codes: 0 on success or when the issue is not labelled for a run, 1 on any
failure (configuration included).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from claude_issue_runner import __version__
from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.event import IssueEvent, load_event_payload
from claude_issue_runner.runner.git import GitPublisher
from claude_issue_runner.runner.github.client import GitHubClient
from claude_issue_runner.runner.http import RetryingHTTPClient
from claude_issue_runner.runner.logging import configure_logging
from claude_issue_runner.runner.run import IssueRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-issue-runner",
        description=(
            "Generate a markdown artifact for a labelled GitHub issue, commit it on a "
            "branch and open a pull request"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"claude-issue-runner {__version__}"
    )
    parser.add_argument(
        "--event-path",
        type=Path,
        default=None,
        help="Event payload JSON (defaults to GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--provider",
        choices=["stub", "anthropic", "openai"],
        default=None,
        help="Content provider (defaults to PROVIDER, then 'stub')",
    )
    parser.add_argument(
        "--repo-root",
        type=Path,
        default=None,
        help="Checkout to write and commit the artifact in (defaults to RUNNER_REPO_ROOT or '.')",
    )
    return parser


def load_settings(args: argparse.Namespace) -> RunnerSettings:
    overrides: dict[str, object] = {}
    if args.event_path is not None:
        overrides["github_event_path"] = args.event_path
    if args.provider is not None:
        overrides["provider"] = args.provider
    if args.repo_root is not None:
        overrides["repo_root"] = args.repo_root
    return RunnerSettings(**overrides)


def build_github_client(settings: RunnerSettings, repository: str) -> GitHubClient | None:
    if not settings.github_token or not repository:
        logger.warning(
            "GITHUB_TOKEN or repository not set; pull request and comments are disabled"
        )
        return None
    return GitHubClient(
        token=settings.github_token,
        repository=repository,
        base_url=settings.github_api_url,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 1

    configure_logging(settings.log_level, settings.log_format)

    payload = load_event_payload(settings.github_event_path)
    event = IssueEvent.from_payload(settings.github_event_name, payload)
    repository = settings.github_repository or event.repository_full_name

    try:
        github = build_github_client(settings, repository)
    except ValueError as e:
        logger.warning(f"GitHub client disabled: {e}")
        github = None

    http = RetryingHTTPClient(
        retries=settings.http_retries,
        timeout=settings.http_timeout_seconds,
    )
    try:
        runner = IssueRunner(
            settings=settings,
            event=event,
            github=github,
            git=GitPublisher(settings.repo_root),
            http=http,
        )
        outcome = runner.run()
        logger.info(
            f"Run {outcome.status}",
            extra={"states": [s.value for s in outcome.history], "error": outcome.error},
        )
        return outcome.exit_code
    finally:
        http.close()
        if github is not None:
            github.close()


if __name__ == "__main__":
    raise SystemExit(main())
