"""Persisting the generated document inside the checkout."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from claude_issue_runner.runner.event import Issue

logger = logging.getLogger(__name__)

ARTIFACTS_DIR = "artifacts"
ARTIFACT_FILENAME = "output.md"


def artifact_relpath(issue_number: int | None) -> str:
    """Repository-relative POSIX path of the artifact for an issue."""

    path = PurePosixPath(ARTIFACTS_DIR)
    if issue_number is not None:
        path = path / f"issue-{issue_number}"
    return str(path / ARTIFACT_FILENAME)


def artifact_header(issue: Issue) -> str:
    number = issue.number if issue.number is not None else "unknown"
    return f"# Output for issue #{number}: {issue.title}\n\n"


def write_artifact(repo_root: Path, issue: Issue, content: str) -> Path:
    """Write header + content to the issue's artifact path, replacing any previous run."""

    path = repo_root / artifact_relpath(issue.number)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(artifact_header(issue) + content, encoding="utf-8")
    logger.info(
        f"Saved artifact at {artifact_relpath(issue.number)}",
        extra={"path": str(path), "chars": len(content)},
    )
    return path
