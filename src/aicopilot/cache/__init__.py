"""Completion caching: factory + in-memory backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aicopilot.cache.key_strategy import compute_cache_key
from aicopilot.cache.memory import CompletionCache
from aicopilot.cache.protocols import ICompletionCache

if TYPE_CHECKING:
    from aicopilot.core.config import CompletionConfig

__all__ = [
    "create_completion_cache",
    "compute_cache_key",
    "CompletionCache",
    "ICompletionCache",
]


def create_completion_cache(settings: object | None = None) -> ICompletionCache:
    """Create the process-wide completion cache.

    Args:
        settings: An ``AppSettings`` or ``CompletionConfig`` instance.
            If None, returns a cache with the default bound.
    """
    config: CompletionConfig | None = None
    if settings is not None:
        config = getattr(settings, "completion", None)
        if config is None and hasattr(settings, "cache_size"):
            config = settings  # type: ignore[assignment]

    if config is None:
        return CompletionCache()
    return CompletionCache(max_entries=config.cache_size)
