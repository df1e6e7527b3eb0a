"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``COPILOT_<GROUP>_*`` env vars.  The provider
credentials and selection additionally honour the conventional
``OPENAI_API_KEY`` / ``ANTHROPIC_API_KEY`` / ``AI_PROVIDER`` variables.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """Remote completion provider configuration.

    Env vars use ``COPILOT_LLM_`` prefix::

        export COPILOT_LLM_PROVIDER=claude
        export ANTHROPIC_API_KEY=sk-ant-...
    """

    model_config = {"env_prefix": "COPILOT_LLM_"}

    provider: Literal["openai", "claude"] = Field(
        default="openai",
        validation_alias=AliasChoices("provider", "COPILOT_LLM_PROVIDER", "AI_PROVIDER"),
    )
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("openai_api_key", "COPILOT_LLM_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    claude_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("claude_api_key", "COPILOT_LLM_CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    )

    openai_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-3.5-turbo"
    openai_max_tokens: int = 100
    openai_temperature: float = 0.1

    claude_url: str = "https://api.anthropic.com/v1/messages"
    claude_model: str = "claude-3-sonnet-20240229"
    claude_max_tokens: int = 150
    anthropic_version: str = "2023-06-01"

    connect_timeout: float = 30.0

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "anthropic":
                return "claude"
        return value

    def api_key_for(self, provider: str) -> str:
        """Return the stripped credential for ``provider`` (empty when unset)."""
        key = self.claude_api_key if provider == "claude" else self.openai_api_key
        return key.strip()


class CompletionConfig(BaseSettings):
    """Orchestration budgets and cache sizing.

    Env vars use ``COPILOT_COMPLETION_`` prefix.
    """

    model_config = {"env_prefix": "COPILOT_COMPLETION_"}

    automatic_timeout_ms: int = 3000
    manual_timeout_ms: int = 30_000
    # Replaces the automatic budget when set; manual triggers keep their own.
    request_timeout_ms: Optional[int] = None
    cache_enabled: bool = True
    cache_size: int = 100
    max_concurrent: int = 4
    min_trigger_length: int = 3

    def timeout_seconds(self, manual: bool) -> float:
        if manual:
            return self.manual_timeout_ms / 1000.0
        budget = self.request_timeout_ms or self.automatic_timeout_ms
        return budget / 1000.0


class ContextConfig(BaseSettings):
    """Context extraction limits.

    Env vars use ``COPILOT_CONTEXT_`` prefix.
    """

    model_config = {"env_prefix": "COPILOT_CONTEXT_"}

    max_context_chars: int = 2000
    lines_before: int = 15
    lines_after: int = 5
    max_dependencies: int = 15
    max_structure: int = 5


class FeatureConfig(BaseSettings):
    """Completion feature toggles.

    Env vars use ``COPILOT_FEATURES_`` prefix.
    """

    model_config = {"env_prefix": "COPILOT_FEATURES_"}

    enable_auto_completion: bool = True
    enable_comment_completion: bool = True
    enable_code_completion: bool = True


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``COPILOT_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "COPILOT_OBSERVABILITY_"}

    log_level: str = "INFO"
    # auto: JSON unless stderr is a terminal
    log_format: Literal["auto", "json", "console"] = "auto"


class APIConfig(BaseSettings):
    """HTTP API metadata.

    Env vars use ``COPILOT_API_`` prefix.
    """

    model_config = {"env_prefix": "COPILOT_API_"}

    title: str = "aicopilot"
    description: str = "Cursor-context extraction and cached AI code completion"
    port: int = 8080


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    completion: CompletionConfig = Field(default_factory=CompletionConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)
    features: FeatureConfig = Field(default_factory=FeatureConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
