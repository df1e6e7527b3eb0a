"""Inbound entry point: from (file text, cursor offset) to a completion result."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Optional, Union

from aicopilot.cache import create_completion_cache
from aicopilot.cache.protocols import ICompletionCache
from aicopilot.context.analysis import CompletionKind, analyze
from aicopilot.context.extractor import ContextExtractor
from aicopilot.context.text_index import TextIndex
from aicopilot.core.config import AppSettings
from aicopilot.exceptions import OutOfRangeError
from aicopilot.models import CompletionResult, ContextBundle, Failed, NoSuggestion, TriggerKind
from aicopilot.providers.factory import create_provider
from aicopilot.providers.protocols import ICompletionProvider
from aicopilot.services.orchestrator import CompletionOrchestrator
from aicopilot.services.trigger_policy import TriggerPolicy

log = logging.getLogger(__name__)


def extension_of(file_name: str) -> str:
    return PurePath(file_name).suffix.lstrip(".")


class CopilotService:
    """Wires the index, extractor, trigger policy and orchestrator together.

    Construct once per process; the cache and provider live as long as the
    service.  Every collaborator can be injected for tests.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        *,
        provider: Optional[ICompletionProvider] = None,
        cache: Optional[ICompletionCache] = None,
        extractor: Optional[ContextExtractor] = None,
        policy: Optional[TriggerPolicy] = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._provider = provider or create_provider(self._settings)
        if cache is None and self._settings.completion.cache_enabled:
            cache = create_completion_cache(self._settings)
        self._extractor = extractor or ContextExtractor.from_settings(self._settings)
        self._policy = policy or TriggerPolicy.from_settings(self._settings)
        self._orchestrator = CompletionOrchestrator(
            self._provider, cache, config=self._settings.completion
        )

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def provider(self) -> ICompletionProvider:
        return self._provider

    @property
    def orchestrator(self) -> CompletionOrchestrator:
        return self._orchestrator

    def is_available(self) -> bool:
        """True when the active provider has a credential."""
        return self._provider.is_configured

    def extract_context(
        self,
        file_text: str,
        file_name: str,
        language_id: str,
        cursor_offset: int,
    ) -> ContextBundle:
        """Build the context bundle only; raises ``OutOfRangeError`` on bad offsets."""
        return self._extractor.extract(TextIndex(file_text), cursor_offset, file_name, language_id)

    async def request_completion(
        self,
        file_text: str,
        file_name: str,
        language_id: str,
        cursor_offset: int,
        trigger_kind: Union[TriggerKind, str] = TriggerKind.AUTOMATIC,
        *,
        is_in_comment: Optional[bool] = None,
    ) -> CompletionResult:
        """Gate, extract and complete.

        Args:
            file_text: Snapshot of the buffer; never mutated.
            file_name: Name used for the header and the file-type check.
            language_id: Host language identifier (``python``, ``java``...).
            cursor_offset: Character offset of the cursor.
            trigger_kind: ``automatic`` (interactive budget) or ``manual``.
            is_in_comment: Host's own comment detection, when it has one.

        Returns:
            ``Suggestion``, ``NoSuggestion`` (including gate rejections) or
            ``Failed``.  Nothing is raised.
        """
        try:
            trigger = TriggerKind(trigger_kind)
        except ValueError:
            return Failed(f"Unknown trigger kind: {trigger_kind!r}")
        index = TextIndex(file_text)
        try:
            cursor = index.position(cursor_offset)
        except OutOfRangeError as e:
            return Failed(str(e))
        current_line = index.line_text(cursor.line_number)

        kind = CompletionKind.GENERAL_CODE
        if is_in_comment is None:
            try:
                analysis = analyze(index, cursor_offset, language_id)
                is_in_comment, kind = analysis.in_comment, analysis.completion_kind
            except Exception as e:
                log.warning("Cursor analysis failed, assuming code position: %s", e)
                is_in_comment = False

        decision = self._policy.evaluate(
            extension_of(file_name),
            is_in_comment,
            current_line.strip(),
            self.is_available(),
            trigger=trigger,
        )
        if not decision:
            log.debug("Completion not triggered for %s: %s", file_name, decision.reason.value)
            return NoSuggestion(decision.reason.value)

        bundle = self._extractor.extract(index, cursor_offset, file_name, language_id)
        log.info(
            "Completion triggered for %s (%s, %s, %d context chars)",
            file_name,
            trigger.value,
            kind.value,
            bundle.total_length,
        )
        return await self._orchestrator.get_completion(bundle, current_line, trigger=trigger)

    async def clear_cache(self) -> None:
        await self._orchestrator.clear_cache()

    async def aclose(self) -> None:
        await self._provider.aclose()

    async def __aenter__(self) -> CopilotService:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
