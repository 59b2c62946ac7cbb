"""Triggering event payload.

GitHub Actions writes the webhook payload to the file named by
`GITHUB_EVENT_PATH`. Only the fields the run needs are extracted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def load_event_payload(path: Path | None) -> dict[str, Any] | None:
    """Read the event payload; a missing or unreadable file yields None."""

    if path is None:
        return None
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to parse GITHUB_EVENT_PATH: {e}", extra={"path": str(path)})
        return None
    if not isinstance(raw, dict):
        logger.warning("Event payload is not a JSON object", extra={"path": str(path)})
        return None
    return raw


def _label_names(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    names: list[str] = []
    for label in value:
        if isinstance(label, dict):
            name = label.get("name")
            if isinstance(name, str):
                names.append(name)
        elif isinstance(label, str):
            names.append(label)
    return tuple(names)


@dataclass(frozen=True, slots=True)
class Issue:
    """The issue that triggered the run. Immutable for the run's duration."""

    number: int | None
    title: str
    body: str
    labels: tuple[str, ...] = ()

    def has_label(self, name: str) -> bool:
        return name in self.labels

    @staticmethod
    def from_json(obj: dict[str, Any]) -> Issue:
        number = obj.get("number")
        title = obj.get("title")
        body = obj.get("body")
        return Issue(
            number=number if isinstance(number, int) and number > 0 else None,
            title=title if isinstance(title, str) else "",
            body=body if isinstance(body, str) else "",
            labels=_label_names(obj.get("labels")),
        )


@dataclass(frozen=True, slots=True)
class IssueEvent:
    name: str
    issue: Issue | None
    repository_full_name: str = ""

    @property
    def is_issues_event(self) -> bool:
        return self.name.startswith("issues")

    @staticmethod
    def from_payload(name: str, payload: dict[str, Any] | None) -> IssueEvent:
        payload = payload or {}

        issue_raw = payload.get("issue")
        issue = Issue.from_json(issue_raw) if isinstance(issue_raw, dict) else None

        repo_raw = payload.get("repository")
        full_name = ""
        if isinstance(repo_raw, dict) and isinstance(repo_raw.get("full_name"), str):
            full_name = repo_raw["full_name"]

        return IssueEvent(name=name, issue=issue, repository_full_name=full_name)
