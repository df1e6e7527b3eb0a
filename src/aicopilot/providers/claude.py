"""Claude-style messages provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from aicopilot.core.config import LLMConfig
from aicopilot.exceptions import UnauthenticatedError
from aicopilot.providers.transport import post_json
from aicopilot.providers.wire import parse_claude_response

log = logging.getLogger(__name__)


class ClaudeProvider:
    """API-key + version headers, single user message, ``content[].text`` reply."""

    name = "claude"

    def __init__(self, config: LLMConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key_for(self.name))

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.connect_timeout)
            )
        return self._client

    def build_payload(self, prompt_text: str) -> dict[str, Any]:
        return {
            "model": self._config.claude_model,
            "max_tokens": self._config.claude_max_tokens,
            "messages": [{"role": "user", "content": prompt_text}],
        }

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": self._config.anthropic_version,
        }

    async def complete(self, prompt_text: str, *, timeout: float) -> str:
        api_key = self._config.api_key_for(self.name)
        if not api_key:
            raise UnauthenticatedError("ANTHROPIC_API_KEY is not set")

        log.debug("Claude request: prompt_length=%d", len(prompt_text))
        body = await post_json(
            self._http(),
            self._config.claude_url,
            headers=self.build_headers(api_key),
            payload=self.build_payload(prompt_text),
            timeout=timeout,
            provider=self.name,
        )
        return parse_claude_response(body)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
