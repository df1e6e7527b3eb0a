"""Completion orchestration: cache lookup, deadline-bounded dispatch, cleanup.

Every call resolves to exactly one ``CompletionResult``; provider failures and
timeouts are converted into ``Failed`` and never raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aicopilot.cache.key_strategy import compute_cache_key
from aicopilot.cache.protocols import ICompletionCache
from aicopilot.core.config import CompletionConfig
from aicopilot.exceptions import ProviderError, ProviderTimeoutError
from aicopilot.models import (
    CompletionRequest,
    CompletionResult,
    ContextBundle,
    Failed,
    NoSuggestion,
    Suggestion,
    TriggerKind,
)
from aicopilot.providers.prompt import build_prompt
from aicopilot.providers.protocols import ICompletionProvider
from aicopilot.services.cleanup import clean_suggestion, preview

log = logging.getLogger(__name__)


class CompletionOrchestrator:
    """Owns the dispatch path from a context bundle to a cleaned suggestion.

    The cache is injected so one instance can be shared process-wide (or
    omitted to disable caching).  An ``asyncio.Semaphore`` bounds in-flight
    provider calls; duplicate keys in flight are not coalesced.
    """

    def __init__(
        self,
        provider: ICompletionProvider,
        cache: Optional[ICompletionCache] = None,
        *,
        config: Optional[CompletionConfig] = None,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._config = config or CompletionConfig()
        self._sem = asyncio.Semaphore(self._config.max_concurrent)
        self._tasks: set[asyncio.Task[CompletionResult]] = set()

    @property
    def provider(self) -> ICompletionProvider:
        return self._provider

    @property
    def cache(self) -> Optional[ICompletionCache]:
        return self._cache

    def prepare(self, bundle: ContextBundle, current_line: str) -> CompletionRequest:
        return CompletionRequest(
            prompt_text=build_prompt(bundle, current_line),
            cache_key=compute_cache_key(bundle, current_line),
        )

    def timeout_for(self, trigger: TriggerKind) -> float:
        return self._config.timeout_seconds(manual=trigger is TriggerKind.MANUAL)

    async def _dispatch(self, prompt_text: str, timeout: float) -> str:
        async with self._sem:
            return await self._provider.complete(prompt_text, timeout=timeout)

    async def get_completion(
        self,
        bundle: ContextBundle,
        current_line: str,
        *,
        trigger: TriggerKind = TriggerKind.AUTOMATIC,
    ) -> CompletionResult:
        """Resolve a completion for ``bundle`` and ``current_line``.

        Cache hits return immediately without consuming a deadline.  Misses
        are dispatched under the trigger's budget (semaphore wait included).
        """
        request = self.prepare(bundle, current_line)

        if self._cache is not None:
            cached = await self._cache.get(request.cache_key)
            if cached is not None:
                log.info("Using cached completion for %s", bundle.file_name)
                return Suggestion(cached, cached=True)

        timeout = self.timeout_for(trigger)
        try:
            raw = await asyncio.wait_for(
                self._dispatch(request.prompt_text, timeout), timeout=timeout
            )
        except (asyncio.TimeoutError, ProviderTimeoutError):
            log.warning(
                "%s completion timed out after %d ms", self._provider.name, int(timeout * 1000)
            )
            return Failed(f"Completion timed out after {int(timeout * 1000)} ms")
        except ProviderError as e:
            log.warning("%s completion failed: %s", self._provider.name, e)
            return Failed(str(e))
        except Exception as e:
            log.exception("Unexpected error during %s completion", self._provider.name)
            return Failed(f"Unexpected error: {e}")

        suggestion = clean_suggestion(raw)
        if not suggestion:
            return NoSuggestion("Provider returned an empty completion")

        if self._cache is not None:
            await self._cache.put(request.cache_key, suggestion)
        log.info("Completion ready: %r", preview(suggestion))
        return Suggestion(suggestion)

    def submit(
        self,
        bundle: ContextBundle,
        current_line: str,
        *,
        trigger: TriggerKind = TriggerKind.AUTOMATIC,
    ) -> asyncio.Task[CompletionResult]:
        """Schedule ``get_completion`` on the running loop and return its task."""
        task = asyncio.create_task(self.get_completion(bundle, current_line, trigger=trigger))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def clear_cache(self) -> None:
        if self._cache is not None:
            await self._cache.clear()
            log.info("Completion cache cleared")
