"""Content providers."""

from claude_issue_runner.llm.factory import LLMFactory
from claude_issue_runner.llm.provider import LLMProvider

__all__ = [
    "LLMFactory",
    "LLMProvider",
]
