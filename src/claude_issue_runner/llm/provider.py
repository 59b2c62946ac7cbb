"""Abstract base class for content providers."""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Abstract base class for content providers.

    A provider turns an issue body into the markdown deliverable that is
    committed as the run's artifact. Implementations: stub, Anthropic, OpenAI.
    """

    name: str

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier reported in the pull request body."""

    @abstractmethod
    def generate(self, issue_body: str) -> str:
        """Generate a markdown document from an issue body.

        Args:
            issue_body: Non-empty issue body text.

        Returns:
            Generated markdown. Never empty.

        Raises:
            EmptyProviderOutputError: If the backend produced no text.
            ProviderHTTPError: If the backend call failed.
        """
