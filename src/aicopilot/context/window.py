"""Line-numbered code window around the cursor."""

from __future__ import annotations

from aicopilot.context.text_index import TextIndex

LINES_BEFORE_CURSOR = 15
LINES_AFTER_CURSOR = 5
CURSOR_MARKER = "█"


def window_bounds(
    cursor_line: int,
    line_count: int,
    *,
    before: int = LINES_BEFORE_CURSOR,
    after: int = LINES_AFTER_CURSOR,
) -> tuple[int, int]:
    """Inclusive 0-based ``(first, last)`` lines of the window, clipped to the buffer."""
    first = max(cursor_line - before, 0)
    last = min(cursor_line + after, line_count - 1)
    return first, last


def render_window(
    index: TextIndex,
    offset: int,
    *,
    before: int = LINES_BEFORE_CURSOR,
    after: int = LINES_AFTER_CURSOR,
) -> str:
    """Render the window; the cursor line carries the marker at the exact column."""
    cursor = index.position(offset)
    first, last = window_bounds(cursor.line_number, index.line_count, before=before, after=after)

    rendered: list[str] = []
    for line_number in range(first, last + 1):
        text = index.line_text(line_number)
        prefix = f"{line_number + 1:3d}: "
        if line_number == cursor.line_number:
            column = min(cursor.column, len(text))
            text = text[:column] + CURSOR_MARKER + text[column:]
        rendered.append(prefix + text + "\n")
    return "".join(rendered)
