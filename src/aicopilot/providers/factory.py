"""Provider factory: resolves the active completion provider from config."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from aicopilot.providers.claude import ClaudeProvider
from aicopilot.providers.openai import OpenAIProvider
from aicopilot.providers.protocols import ICompletionProvider

if TYPE_CHECKING:
    from aicopilot.core.config import AppSettings

log = logging.getLogger(__name__)

_PROVIDERS = {
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
}


def create_provider(
    settings: AppSettings,
    *,
    client: httpx.AsyncClient | None = None,
) -> ICompletionProvider:
    """Create the provider named by ``settings.llm.provider``.

    Args:
        settings: Application settings (read only).
        client: Optional shared ``httpx.AsyncClient``; the provider creates
            and owns one when omitted.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    name = settings.llm.provider
    cls = _PROVIDERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown completion provider: {name!r}")
    log.info("Using %s completion provider", name)
    return cls(settings.llm, client=client)
