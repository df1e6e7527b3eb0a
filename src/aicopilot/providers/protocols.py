"""Completion provider protocol: the contract both wire variants implement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICompletionProvider(Protocol):
    """A remote text-completion backend and its wire format.

    Implementations raise ``UnauthenticatedError``, ``UpstreamError``,
    ``ProviderTimeoutError``, ``ProviderConnectionError`` or
    ``ParseFailureError``; they never return ``None``.
    """

    name: str

    @property
    def is_configured(self) -> bool:
        """True when a credential is present."""
        ...

    async def complete(self, prompt_text: str, *, timeout: float) -> str:
        """Send ``prompt_text`` and return the raw completion text.

        Args:
            prompt_text: Fully built prompt.
            timeout: Deadline in seconds for the whole HTTP exchange.
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP client if this provider owns it."""
        ...
