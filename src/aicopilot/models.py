"""Data models shared across the completion pipeline.

Per-request objects (``ContextBundle``, ``CompletionRequest``) are frozen
dataclasses created for one invocation and dropped afterwards.  A request
always ends in exactly one ``CompletionResult`` variant.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import ClassVar, Union


class TriggerKind(str, Enum):
    """How a completion was requested; selects the deadline budget."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class ResultKind(str, Enum):
    SUGGESTION = "suggestion"
    NO_SUGGESTION = "no_suggestion"
    FAILED = "failed"


# ── Context ──────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class ContextBundle:
    """Assembled textual summary of the code around the cursor.

    ``text`` is the rendering sent to the provider: header, dependencies,
    structure and code window, bounded by the extractor's character cap.
    """

    file_name: str
    language_id: str
    dependency_lines: tuple[str, ...] = ()
    structure_lines: tuple[str, ...] = ()
    code_window: str = ""
    text: str = ""
    truncated: bool = False

    def serialize(self) -> str:
        """Stable serialization used for cache keys."""
        return self.text

    @property
    def total_length(self) -> int:
        return len(self.text)


@dataclasses.dataclass(frozen=True)
class CompletionRequest:
    """A prompt ready for dispatch plus its memoization key."""

    prompt_text: str
    cache_key: str


# ── Results ──────────────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class Suggestion:
    """Cleaned completion text to insert at the original cursor offset."""

    kind: ClassVar[ResultKind] = ResultKind.SUGGESTION

    text: str
    cached: bool = False

    def apply(self, buffer: str, offset: int) -> tuple[str, int]:
        """Insert the suggestion into ``buffer``.

        Returns the new buffer and the cursor offset advanced past the
        inserted text.
        """
        return buffer[:offset] + self.text + buffer[offset:], offset + len(self.text)


@dataclasses.dataclass(frozen=True)
class NoSuggestion:
    """The provider answered with nothing usable, or the trigger gate declined."""

    kind: ClassVar[ResultKind] = ResultKind.NO_SUGGESTION

    reason: str = ""


@dataclasses.dataclass(frozen=True)
class Failed:
    """The request failed; ``reason`` is human readable."""

    kind: ClassVar[ResultKind] = ResultKind.FAILED

    reason: str


CompletionResult = Union[Suggestion, NoSuggestion, Failed]
