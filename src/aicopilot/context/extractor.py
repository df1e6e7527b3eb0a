"""Builds the ``ContextBundle`` sent to the completion provider.

Sections are assembled in a fixed order: file header, dependencies,
structure, code window.  Each sub-extraction is isolated: a failure logs an
``ExtractionDegradedError`` and leaves that section empty instead of aborting
the bundle.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from aicopilot.context.dependencies import extract_dependencies
from aicopilot.context.structure import extract_structure
from aicopilot.context.text_index import TextIndex
from aicopilot.context.window import render_window
from aicopilot.exceptions import ExtractionDegradedError
from aicopilot.models import ContextBundle

log = logging.getLogger(__name__)

MAX_CONTEXT_CHARS = 2000
TRUNCATION_MARKER = "\n... (truncated for brevity)"

T = TypeVar("T")


def _guarded(section: str, fn: Callable[[], T], fallback: T) -> T:
    try:
        return fn()
    except Exception as e:
        log.warning("%s", ExtractionDegradedError(section, e))
        return fallback


class ContextExtractor:
    """Produce a bounded context bundle from a buffer and cursor offset."""

    def __init__(
        self,
        *,
        max_chars: int = MAX_CONTEXT_CHARS,
        lines_before: int = 15,
        lines_after: int = 5,
        max_dependencies: int = 15,
        max_structure: int = 5,
    ) -> None:
        self._max_chars = max_chars
        self._lines_before = lines_before
        self._lines_after = lines_after
        self._max_dependencies = max_dependencies
        self._max_structure = max_structure

    @classmethod
    def from_settings(cls, settings: object) -> ContextExtractor:
        """Build from an ``AppSettings`` or ``ContextConfig`` instance."""
        config = getattr(settings, "context", settings)
        return cls(
            max_chars=config.max_context_chars,
            lines_before=config.lines_before,
            lines_after=config.lines_after,
            max_dependencies=config.max_dependencies,
            max_structure=config.max_structure,
        )

    def extract(
        self,
        index: TextIndex,
        offset: int,
        file_name: str,
        language_id: str,
    ) -> ContextBundle:
        """Assemble the bundle for ``offset``.

        Raises:
            OutOfRangeError: if ``offset`` is outside the buffer.  This is the
                only failure that propagates; section failures degrade.
        """
        cursor = index.position(offset)
        lines = _guarded("lines", index.lines, [])

        dependencies = _guarded(
            "dependencies",
            lambda: extract_dependencies(lines, limit=self._max_dependencies),
            [],
        )
        structure = _guarded(
            "structure",
            lambda: extract_structure(
                index.text, lines, cursor.line_number, language_id, limit=self._max_structure
            ),
            [],
        )
        window = _guarded(
            "code window",
            lambda: render_window(
                index, offset, before=self._lines_before, after=self._lines_after
            ),
            "",
        )

        parts = [f"File: {file_name}\nLanguage: {language_id}\n\n"]
        if dependencies:
            parts.append("Dependencies:\n" + "\n".join(dependencies) + "\n\n")
        if structure:
            parts.append("Structure Context:\n" + "\n".join(structure) + "\n\n")
        parts.append("Code Context:\n" + window)

        text, truncated = self._truncate("".join(parts))
        if truncated:
            log.debug("Context truncated to %d chars for %s", len(text), file_name)

        return ContextBundle(
            file_name=file_name,
            language_id=language_id,
            dependency_lines=tuple(dependencies),
            structure_lines=tuple(structure),
            code_window=window,
            text=text,
            truncated=truncated,
        )

    def _truncate(self, text: str) -> tuple[str, bool]:
        """Cap ``text`` at ``max_chars``, marker included, when it overflows."""
        if len(text) <= self._max_chars:
            return text, False
        keep = self._max_chars - len(TRUNCATION_MARKER)
        return text[:keep] + TRUNCATION_MARKER, True
