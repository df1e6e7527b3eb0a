"""OpenAI-style chat-completions provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from aicopilot.core.config import LLMConfig
from aicopilot.exceptions import UnauthenticatedError
from aicopilot.providers.prompt import SYSTEM_PROMPT
from aicopilot.providers.transport import post_json
from aicopilot.providers.wire import parse_openai_response

log = logging.getLogger(__name__)


class OpenAIProvider:
    """Bearer-token auth, chat message payload, ``choices[0].message.content`` reply."""

    name = "openai"

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
            "model": self._config.openai_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt_text},
            ],
            "max_tokens": self._config.openai_max_tokens,
            "temperature": self._config.openai_temperature,
            "stream": False,
        }

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    async def complete(self, prompt_text: str, *, timeout: float) -> str:
        api_key = self._config.api_key_for(self.name)
        if not api_key:
            raise UnauthenticatedError("OPENAI_API_KEY is not set")

        log.debug("OpenAI request: prompt_length=%d preview=%r", len(prompt_text), prompt_text[:100])
        body = await post_json(
            self._http(),
            self._config.openai_url,
            headers=self.build_headers(api_key),
            payload=self.build_payload(prompt_text),
            timeout=timeout,
            provider=self.name,
        )
        return parse_openai_response(body)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
