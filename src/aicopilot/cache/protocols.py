"""Completion cache protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICompletionCache(Protocol):
    """Async key -> suggestion store shared by concurrent requests."""

    async def get(self, key: str) -> str | None:
        """Retrieve a cached suggestion by key. Returns None on miss."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Store a suggestion under the given key."""
        ...

    async def clear(self) -> None:
        """Remove all entries from the cache."""
        ...

    def __len__(self) -> int:
        ...
