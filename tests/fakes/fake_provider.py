"""Fake completion provider for testing."""

from __future__ import annotations

import asyncio
from typing import Optional


class FakeCompletionProvider:
    """Canned-response provider for tests: no HTTP calls needed.

    ``delay`` makes ``complete`` sleep before answering so deadline handling
    can be exercised; ``error`` is raised instead of answering when set.
    """

    name = "fake"

    def __init__(
        self,
        *,
        response: str = "return total",
        configured: bool = True,
        delay: float = 0.0,
        error: Optional[Exception] = None,
    ) -> None:
        self._response = response
        self._configured = configured
        self._delay = delay
        self._error = error
        self.calls: list[dict[str, object]] = []
        self.closed = False

    @property
    def is_configured(self) -> bool:
        return self._configured

    async def complete(self, prompt_text: str, *, timeout: float) -> str:
        self.calls.append({"prompt_text": prompt_text, "timeout": timeout})
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._response

    async def aclose(self) -> None:
        self.closed = True
