"""Tests for TextIndex: offset/line mapping and cursor positions."""

from __future__ import annotations

import pytest

from aicopilot.context.text_index import TextIndex
from aicopilot.exceptions import OutOfRangeError


class TestLineMapping:
    def test_empty_buffer_has_one_empty_line(self) -> None:
        index = TextIndex("")
        assert index.line_count == 1
        assert index.line_text(0) == ""
        assert index.line_of(0).number == 0

    def test_trailing_newline_adds_empty_line(self) -> None:
        index = TextIndex("a\nb\n")
        assert index.line_count == 3
        assert index.lines() == ["a", "b", ""]

    def test_line_of_each_offset(self) -> None:
        index = TextIndex("ab\ncd\nef")
        assert [index.line_of(i).number for i in range(9)] == [0, 0, 0, 1, 1, 1, 2, 2, 2]

    def test_offset_at_end_of_buffer_is_valid(self) -> None:
        index = TextIndex("ab\ncd")
        span = index.line_of(5)
        assert span.number == 1
        assert (span.start, span.end) == (3, 5)

    def test_crlf_excluded_from_line(self) -> None:
        index = TextIndex("one\r\ntwo\r\n")
        assert index.line_text(0) == "one"
        assert index.line_text(1) == "two"
        assert index.span_of(0).end == 3

    @pytest.mark.parametrize("offset", [-1, 6, 100])
    def test_out_of_range_offset(self, offset: int) -> None:
        with pytest.raises(OutOfRangeError):
            TextIndex("ab\ncd").line_of(offset)

    def test_out_of_range_line(self) -> None:
        index = TextIndex("ab\ncd")
        with pytest.raises(OutOfRangeError):
            index.span_of(2)
        with pytest.raises(OutOfRangeError):
            index.span_of(-1)


class TestCursorPosition:
    def test_column_is_relative_to_line_start(self) -> None:
        index = TextIndex("first\nsecond line\nthird")
        cursor = index.position(9)
        assert cursor.line_number == 1
        assert cursor.line_start == 6
        assert cursor.line_end == 17
        assert cursor.column == 3

    def test_position_rejects_bad_offset(self) -> None:
        with pytest.raises(OutOfRangeError):
            TextIndex("abc").position(4)
