"""Decides from cheap textual signals whether a completion is worth requesting.

Checks run cheapest and most specific first: provider availability, file
type, comment position, incomplete-statement shape, then a minimum line
length.
"""

from __future__ import annotations

import dataclasses
import re
from enum import Enum
from typing import TYPE_CHECKING, Optional

from aicopilot.models import TriggerKind

if TYPE_CHECKING:
    from aicopilot.core.config import FeatureConfig

SUPPORTED_EXTENSIONS = frozenset({"java", "py", "js", "ts", "kt", "scala"})
MIN_TRIGGER_LENGTH = 3

_DEFINING_KEYWORD_RE = re.compile(r"\b(?:def|function|fun|public|private|protected)\b.*\(")


class TriggerReason(str, Enum):
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    AUTO_COMPLETION_DISABLED = "auto_completion_disabled"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    COMMENT_COMPLETION_DISABLED = "comment_completion_disabled"
    CODE_COMPLETION_DISABLED = "code_completion_disabled"
    IN_COMMENT = "in_comment"
    INCOMPLETE_STATEMENT = "incomplete_statement"
    MIN_LENGTH_MET = "min_length_met"
    LINE_TOO_SHORT = "line_too_short"
    MANUAL = "manual"


@dataclasses.dataclass(frozen=True)
class TriggerDecision:
    should_trigger: bool
    reason: TriggerReason

    def __bool__(self) -> bool:
        return self.should_trigger


def normalize_extension(file_extension: str) -> str:
    return file_extension.strip().lstrip(".").lower()


def is_incomplete_statement(line: str) -> bool:
    """Ends with ``:`` or ``{``, or a defining keyword is followed by ``(``."""
    trimmed = line.strip()
    return trimmed.endswith((":", "{")) or bool(_DEFINING_KEYWORD_RE.search(trimmed))


class TriggerPolicy:
    """Gate for interactive completion attempts."""

    def __init__(
        self,
        *,
        min_length: int = MIN_TRIGGER_LENGTH,
        features: Optional[FeatureConfig] = None,
        extensions: frozenset[str] = SUPPORTED_EXTENSIONS,
    ) -> None:
        self._min_length = min_length
        self._features = features
        self._extensions = extensions

    @classmethod
    def from_settings(cls, settings: object) -> TriggerPolicy:
        return cls(
            min_length=settings.completion.min_trigger_length,  # type: ignore[attr-defined]
            features=settings.features,  # type: ignore[attr-defined]
        )

    def _enabled(self, toggle: str) -> bool:
        return self._features is None or getattr(self._features, toggle)

    def evaluate(
        self,
        file_extension: str,
        is_in_comment: bool,
        current_line_trimmed: str,
        provider_available: bool,
        *,
        trigger: TriggerKind = TriggerKind.AUTOMATIC,
    ) -> TriggerDecision:
        if not provider_available:
            return TriggerDecision(False, TriggerReason.PROVIDER_UNAVAILABLE)
        if trigger is TriggerKind.MANUAL:
            return TriggerDecision(True, TriggerReason.MANUAL)
        if not self._enabled("enable_auto_completion"):
            return TriggerDecision(False, TriggerReason.AUTO_COMPLETION_DISABLED)
        if normalize_extension(file_extension) not in self._extensions:
            return TriggerDecision(False, TriggerReason.UNSUPPORTED_FILE_TYPE)

        if is_in_comment:
            if not self._enabled("enable_comment_completion"):
                return TriggerDecision(False, TriggerReason.COMMENT_COMPLETION_DISABLED)
            return TriggerDecision(True, TriggerReason.IN_COMMENT)

        if not self._enabled("enable_code_completion"):
            return TriggerDecision(False, TriggerReason.CODE_COMPLETION_DISABLED)
        if is_incomplete_statement(current_line_trimmed):
            return TriggerDecision(True, TriggerReason.INCOMPLETE_STATEMENT)
        if len(current_line_trimmed.strip()) >= self._min_length:
            return TriggerDecision(True, TriggerReason.MIN_LENGTH_MET)
        return TriggerDecision(False, TriggerReason.LINE_TOO_SHORT)

    def should_trigger(
        self,
        file_extension: str,
        is_in_comment: bool,
        current_line_trimmed: str,
        provider_available: bool,
    ) -> bool:
        return self.evaluate(
            file_extension, is_in_comment, current_line_trimmed, provider_available
        ).should_trigger
