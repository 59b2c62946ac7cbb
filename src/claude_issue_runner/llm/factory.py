"""Factory for creating content providers."""

import logging

from claude_issue_runner.llm.anthropic_provider import AnthropicProvider
from claude_issue_runner.llm.openai_provider import OpenAIProvider
from claude_issue_runner.llm.provider import LLMProvider
from claude_issue_runner.llm.stub_provider import StubProvider
from claude_issue_runner.runner.config import RunnerSettings
from claude_issue_runner.runner.http import RetryingHTTPClient

logger = logging.getLogger(__name__)


class LLMFactory:
    """Factory for creating provider instances."""

    @staticmethod
    def create(settings: RunnerSettings, http: RetryingHTTPClient | None = None) -> LLMProvider:
        """Create a provider based on configuration.

        Args:
            settings: Runner settings specifying the provider.
            http: Client for provider API calls. Built from settings if omitted.

        Returns:
            Configured provider instance.

        Raises:
            MissingCredentialError: If the selected provider has no API key.
            ValueError: If provider type is not supported.
        """
        logger.info(f"Creating provider: {settings.provider}")

        if settings.provider == "stub":
            return StubProvider()

        if http is None:
            http = RetryingHTTPClient(
                retries=settings.http_retries,
                timeout=settings.http_timeout_seconds,
            )

        if settings.provider == "anthropic":
            return AnthropicProvider(settings, http)
        elif settings.provider == "openai":
            return OpenAIProvider(settings, http)
        else:
            raise ValueError(f"Unsupported provider: {settings.provider}")
