"""Anthropic Messages API provider implementation."""

import logging
from typing import Any

from claude_issue_runner.errors import EmptyProviderOutputError, MissingCredentialError
from claude_issue_runner.llm.provider import LLMProvider
from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.http import RetryingHTTPClient

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

SYSTEM_PROMPT = """You are a meticulous software engineer.
Given a GitHub Issue body, produce the requested artifacts in a concise, actionable markdown deliverable.
- Focus on the requested code or docs only.
- Include short context when needed.
- Avoid external links unless necessary.
"""


def extract_text(data: dict[str, Any]) -> str:
    """Join the text blocks of a Messages API response."""

    parts = data.get("content")
    if not isinstance(parts, list):
        return ""
    texts = [
        (p.get("text") or "") if isinstance(p, dict) and p.get("type") == "text" else ""
        for p in parts
    ]
    return "\n\n".join(texts)


class AnthropicProvider(LLMProvider):
    name = "anthropic"

    def __init__(self, settings: RunnerSettings, http: RetryingHTTPClient) -> None:
        """Initialize the Anthropic provider.

        Args:
            settings: Runner settings carrying key, model and endpoint.
            http: Client used for the (retried) API call.

        Raises:
            MissingCredentialError: If ANTHROPIC_API_KEY is not set.
        """
        if not settings.anthropic_api_key:
            raise MissingCredentialError("ANTHROPIC_API_KEY not set")

        self._api_key = settings.anthropic_api_key
        self._model = settings.anthropic_model
        self._url = settings.anthropic_base_url.rstrip("/") + "/v1/messages"
        self._max_tokens = settings.anthropic_max_tokens
        self._temperature = settings.llm_temperature
        self._http = http

        logger.info(f"Anthropic provider initialized with model: {self._model}")

    @property
    def model(self) -> str:
        return self._model

    def build_request(self, issue_body: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": issue_body}],
        }

    def generate(self, issue_body: str) -> str:
        resp = self._http.post_json(
            self._url,
            headers={
                "content-type": "application/json",
                "x-api-key": self._api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            payload=self.build_request(issue_body),
        )

        content = extract_text(resp.json())
        if not content.strip():
            raise EmptyProviderOutputError("Anthropic returned empty content")

        logger.debug(f"Generated {len(content)} characters")
        return content
