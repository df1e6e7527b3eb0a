"""Line/offset mapping over an immutable text buffer."""

from __future__ import annotations

import dataclasses
from bisect import bisect_right

from aicopilot.exceptions import OutOfRangeError


@dataclasses.dataclass(frozen=True)
class LineSpan:
    """A 0-based line and its ``[start, end)`` offsets, terminator excluded."""

    number: int
    start: int
    end: int


@dataclasses.dataclass(frozen=True)
class CursorPosition:
    """A cursor offset together with the line it falls on."""

    offset: int
    line_number: int
    line_start: int
    line_end: int

    @property
    def column(self) -> int:
        return self.offset - self.line_start


class TextIndex:
    """Offset <-> line lookups for one buffer snapshot.

    Lines are split on ``\\n``; a ``\\r`` right before the terminator is not
    part of the line.  An empty buffer has one empty line, and a buffer ending
    in a newline has a trailing empty line, the way editors count them.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        starts = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._starts = starts

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> LineSpan:
        """Return the line containing ``offset`` (``offset == len(text)`` is valid)."""
        if offset < 0 or offset > len(self._text):
            raise OutOfRangeError(f"Offset {offset} outside buffer of length {len(self._text)}")
        return self.span_of(bisect_right(self._starts, offset) - 1)

    def span_of(self, line_number: int) -> LineSpan:
        """Return start/end offsets of a 0-based line."""
        if line_number < 0 or line_number >= len(self._starts):
            raise OutOfRangeError(f"Line {line_number} outside buffer of {len(self._starts)} lines")
        start = self._starts[line_number]
        if line_number + 1 < len(self._starts):
            end = self._starts[line_number + 1] - 1
        else:
            end = len(self._text)
        if end > start and self._text[end - 1] == "\r":
            end -= 1
        return LineSpan(number=line_number, start=start, end=end)

    def line_text(self, line_number: int) -> str:
        span = self.span_of(line_number)
        return self._text[span.start:span.end]

    def lines(self) -> list[str]:
        return [self.line_text(i) for i in range(self.line_count)]

    def position(self, offset: int) -> CursorPosition:
        span = self.line_of(offset)
        return CursorPosition(
            offset=offset,
            line_number=span.number,
            line_start=span.start,
            line_end=span.end,
        )
