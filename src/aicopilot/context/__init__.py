"""Context extraction: line index, dependency/structure/window sections, cursor analysis."""

from __future__ import annotations

from aicopilot.context.analysis import CompletionKind, CursorAnalysis, analyze
from aicopilot.context.extractor import MAX_CONTEXT_CHARS, TRUNCATION_MARKER, ContextExtractor
from aicopilot.context.text_index import CursorPosition, LineSpan, TextIndex

__all__ = [
    "TextIndex",
    "LineSpan",
    "CursorPosition",
    "ContextExtractor",
    "MAX_CONTEXT_CHARS",
    "TRUNCATION_MARKER",
    "CompletionKind",
    "CursorAnalysis",
    "analyze",
]
