"""aicopilot: cursor-context extraction and cached AI code completion.

Usage::

    from aicopilot import CopilotService, TriggerKind

    async with CopilotService() as copilot:
        result = await copilot.request_completion(text, "Main.java", "java", offset)
"""

from __future__ import annotations

from aicopilot.context import ContextExtractor, TextIndex
from aicopilot.core.config import AppSettings
from aicopilot.exceptions import CopilotError, OutOfRangeError, ProviderError
from aicopilot.models import (
    CompletionResult,
    ContextBundle,
    Failed,
    NoSuggestion,
    Suggestion,
    TriggerKind,
)
from aicopilot.services import CompletionOrchestrator, CopilotService, TriggerPolicy

__all__ = [
    "AppSettings",
    "CopilotService",
    "CompletionOrchestrator",
    "TriggerPolicy",
    "ContextExtractor",
    "TextIndex",
    "TriggerKind",
    "ContextBundle",
    "CompletionResult",
    "Suggestion",
    "NoSuggestion",
    "Failed",
    "CopilotError",
    "OutOfRangeError",
    "ProviderError",
]
