"""Post-processing of raw provider text."""

from __future__ import annotations

import re

_FENCE_OPEN_RE = re.compile(r"```[\w+#.-]*\n?")

PREVIEW_WIDTH = 50


def clean_suggestion(text: str) -> str:
    """Strip fenced code-block delimiters and outer whitespace."""
    text = _FENCE_OPEN_RE.sub("", text)
    return text.replace("```", "").strip()


def preview(text: str, width: int = PREVIEW_WIDTH) -> str:
    """Short single-line rendering for logs and listings."""
    if len(text) <= width:
        return text
    first_line = text.split("\n", 1)[0]
    if len(first_line) <= width:
        return first_line + "..."
    return text[: width - 3] + "..."
