"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aicopilot.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_budgets(settings)
    _check_cache(settings)
    _check_context(settings)
    _check_api_key(settings)


def _check_budgets(settings: AppSettings) -> None:
    """Reject non-positive deadlines and worker counts."""
    completion = settings.completion
    if completion.automatic_timeout_ms <= 0 or completion.manual_timeout_ms <= 0:
        raise ValueError(
            "COPILOT_COMPLETION_AUTOMATIC_TIMEOUT_MS and COPILOT_COMPLETION_MANUAL_TIMEOUT_MS "
            "must be positive."
        )
    if completion.request_timeout_ms is not None and completion.request_timeout_ms <= 0:
        raise ValueError("COPILOT_COMPLETION_REQUEST_TIMEOUT_MS must be positive when set.")
    if completion.max_concurrent < 1:
        raise ValueError("COPILOT_COMPLETION_MAX_CONCURRENT must be at least 1.")


def _check_cache(settings: AppSettings) -> None:
    if settings.completion.cache_size < 1:
        raise ValueError("COPILOT_COMPLETION_CACHE_SIZE must be at least 1.")


def _check_context(settings: AppSettings) -> None:
    """The truncation marker alone must fit inside the context cap."""
    from aicopilot.context.extractor import TRUNCATION_MARKER

    if settings.context.max_context_chars <= len(TRUNCATION_MARKER):
        raise ValueError(
            f"COPILOT_CONTEXT_MAX_CONTEXT_CHARS must exceed {len(TRUNCATION_MARKER)} characters."
        )


def _check_api_key(settings: AppSettings) -> None:
    """Warn when the active provider has no credential; completions will be gated off."""
    provider = settings.llm.provider
    if not settings.llm.api_key_for(provider):
        env_name = "ANTHROPIC_API_KEY" if provider == "claude" else "OPENAI_API_KEY"
        log.warning(
            "No API key configured for provider '%s'. Set %s; completions are disabled until then.",
            provider,
            env_name,
        )
