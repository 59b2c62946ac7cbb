"""Configuration for a single runner invocation.

Configuration is loaded from:
- environment variables (the ones GitHub Actions exports, plus provider keys)
- and a local `.env` file (if present)

Provider credentials are intentionally optional here. A missing key for the
selected provider is reported when the provider is built, so that the failure
can still be commented back on the issue.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["stub", "anthropic", "openai"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class RunnerSettings(BaseSettings):
    """Settings for one issue run.

    Environment variables:
    - GITHUB_REPOSITORY, GITHUB_EVENT_PATH, GITHUB_EVENT_NAME, GITHUB_TOKEN
    - PROVIDER            (stub | anthropic | openai)
    - ANTHROPIC_API_KEY, ANTHROPIC_MODEL
    - OPENAI_API_KEY, OPENAI_MODEL
    - LOG_LEVEL, LOG_FORMAT (optional)

    Notes:
        Tests can skip the `.env` file via `RunnerSettings(_env_file=None)`.
    """

    github_repository: str = Field(
        default="",
        validation_alias="GITHUB_REPOSITORY",
        description="Repository slug in the form 'owner/repo'",
    )
    github_event_path: Path | None = Field(
        default=None,
        validation_alias="GITHUB_EVENT_PATH",
        description="Path to the JSON payload of the triggering event",
    )
    github_event_name: str = Field(
        default="",
        validation_alias="GITHUB_EVENT_NAME",
        description="Name of the triggering event, e.g. 'issues'",
    )
    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="Token used for pull request and comment API calls",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_server_url: str = Field(
        default="https://github.com",
        validation_alias="GITHUB_SERVER_URL",
        description="GitHub web URL, used for the manual compare link",
    )

    provider: ProviderName = Field(
        default="stub",
        validation_alias="PROVIDER",
        description="Content provider to use",
    )

    anthropic_api_key: str | None = Field(default=None, validation_alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-20240620", validation_alias="ANTHROPIC_MODEL"
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com", validation_alias="ANTHROPIC_BASE_URL"
    )
    anthropic_max_tokens: int = Field(
        default=4096, gt=0, validation_alias="ANTHROPIC_MAX_TOKENS"
    )

    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", validation_alias="OPENAI_BASE_URL"
    )

    llm_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        validation_alias="LLM_TEMPERATURE",
        description="Sampling temperature sent to the provider",
    )

    http_retries: int = Field(
        default=2,
        ge=0,
        validation_alias="HTTP_RETRIES",
        description="Extra attempts for provider calls answered with 429 or 5xx",
    )
    http_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        validation_alias="HTTP_TIMEOUT_SECONDS",
    )

    trigger_label: str = Field(
        default="claude-code",
        validation_alias="TRIGGER_LABEL",
        description="Issues without this label are ignored",
    )
    fallback_base_branch: str = Field(
        default="main",
        validation_alias="FALLBACK_BASE_BRANCH",
        description="Pull request base when the default branch cannot be looked up",
    )
    repo_root: Path = Field(
        default=Path("."),
        validation_alias="RUNNER_REPO_ROOT",
        description="Checkout where artifacts are written and committed",
    )

    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["text", "json"] = Field(default="text", validation_alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("provider", "log_format", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def model_name(self) -> str:
        """Model identifier of the selected provider ('stub' for the stub)."""

        if self.provider == "anthropic":
            return self.anthropic_model
        if self.provider == "openai":
            return self.openai_model
        return "stub"
