"""In-memory completion cache with clear-on-overflow eviction."""

from __future__ import annotations

import asyncio
import logging

log = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100


class CompletionCache:
    """Dict-backed cache that empties itself when it grows past ``max_entries``.

    Eviction is deliberately coarse: inserting a new key that would push the
    size over the bound clears every entry first, so the cache restarts at
    size 1.  Size check, clear and insert happen under one ``asyncio.Lock``
    so concurrent inserts cannot lose an update in between.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._store: dict[str, str] = {}
        self._lock = asyncio.Lock()
        self.overflow_count = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._store)

    async def get(self, key: str) -> str | None:
        """Retrieve a suggestion by key. Returns None on miss."""
        async with self._lock:
            return self._store.get(key)

    async def put(self, key: str, value: str) -> None:
        """Insert ``value``; existing entries are never overwritten."""
        async with self._lock:
            if key in self._store:
                return
            if len(self._store) + 1 > self._max_entries:
                log.info("Completion cache exceeded %d entries, clearing", self._max_entries)
                self._store.clear()
                self.overflow_count += 1
            self._store[key] = value

    async def clear(self) -> None:
        """Remove all entries."""
        async with self._lock:
            self._store.clear()
