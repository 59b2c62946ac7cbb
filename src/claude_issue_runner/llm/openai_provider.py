"""OpenAI Chat Completions provider implementation."""

import logging
from typing import Any

from claude_issue_runner.errors import EmptyProviderOutputError, MissingCredentialError
from claude_issue_runner.llm.provider import LLMProvider
from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.http import RetryingHTTPClient

logger = logging.getLogger(__name__)

# Output is requested in Japanese, with complete file contents in code blocks.
SYSTEM_PROMPT = (
    "あなたは熟練のソフトウェアエンジニアです。"
    "出力は日本語で、必要なコードは完全なファイル内容を Markdown とコードブロックで示してください。"
    "冗長さを避け、実行/適用可能な形でまとめてください。"
)


def extract_message_content(data: dict[str, Any]) -> str:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return str(content) if content is not None else ""


class OpenAIProvider(LLMProvider):
    """OpenAI API provider implementation."""

    name = "openai"

    def __init__(self, settings: RunnerSettings, http: RetryingHTTPClient) -> None:
        if not settings.openai_api_key:
            raise MissingCredentialError("OPENAI_API_KEY not set")

        self._api_key = settings.openai_api_key
        self._model = settings.openai_model
        self._url = settings.openai_base_url.rstrip("/") + "/chat/completions"
        self._temperature = settings.llm_temperature
        self._http = http

        logger.info(f"OpenAI provider initialized with model: {self._model}")

    @property
    def model(self) -> str:
        return self._model

    def build_request(self, issue_body: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "temperature": self._temperature,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": issue_body},
            ],
        }

    def generate(self, issue_body: str) -> str:
        resp = self._http.post_json(
            self._url,
            headers={
                "content-type": "application/json",
                "authorization": f"Bearer {self._api_key}",
            },
            payload=self.build_request(issue_body),
        )

        content = extract_message_content(resp.json())
        if not content.strip():
            raise EmptyProviderOutputError("OpenAI returned empty content")

        logger.debug(f"Generated {len(content)} characters")
        return content
