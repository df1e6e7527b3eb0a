"""Tests for provider response decoding and the tolerant field scan."""

from __future__ import annotations

import json

import pytest

from aicopilot.exceptions import ParseFailureError
from aicopilot.providers.wire import (
    parse_claude_response,
    parse_openai_response,
    scan_string_field,
    unescape_json_string,
)


class TestOpenAIResponse:
    def test_content_extracted(self) -> None:
        body = json.dumps({"choices": [{"message": {"role": "assistant", "content": "return x;"}}]})
        assert parse_openai_response(body) == "return x;"

    def test_escaped_quotes_survive(self) -> None:
        body = '{"choices":[{"message":{"content":"a \\"quoted\\" word"}}]}'
        assert parse_openai_response(body) == 'a "quoted" word'

    def test_null_content_is_empty(self) -> None:
        body = json.dumps({"choices": [{"message": {"content": None}}]})
        assert parse_openai_response(body) == ""

    def test_missing_choices_raises(self) -> None:
        with pytest.raises(ParseFailureError):
            parse_openai_response(json.dumps({"error": "nope"}))

    def test_empty_choices_raises(self) -> None:
        with pytest.raises(ParseFailureError):
            parse_openai_response(json.dumps({"choices": []}))

    def test_invalid_json_falls_back_to_scan(self) -> None:
        body = '{"choices":[{"message":{"content" : "a \\"quoted\\" word\\nnext"}}]} trailing junk'
        assert parse_openai_response(body) == 'a "quoted" word\nnext'

    def test_invalid_json_without_field_raises(self) -> None:
        with pytest.raises(ParseFailureError) as exc_info:
            parse_openai_response("<html>bad gateway</html>")
        assert exc_info.value.raw_response == "<html>bad gateway</html>"


class TestClaudeResponse:
    def test_text_blocks_joined(self) -> None:
        body = json.dumps(
            {
                "content": [
                    {"type": "text", "text": "for (int i = 0; "},
                    {"type": "tool_use", "id": "x"},
                    {"type": "text", "text": "i < n; i++)"},
                ]
            }
        )
        assert parse_claude_response(body) == "for (int i = 0; i < n; i++)"

    def test_unicode_escape(self) -> None:
        body = '{"content":[{"type":"text","text":"caf\\u00e9"}]}'
        assert parse_claude_response(body) == "café"

    def test_missing_content_raises(self) -> None:
        with pytest.raises(ParseFailureError):
            parse_claude_response(json.dumps({"type": "error"}))

    def test_invalid_json_falls_back_to_scan(self) -> None:
        body = '{"content":[{"type":"text","text":"say \\"hi\\""}]'
        assert parse_claude_response(body) == 'say "hi"'


class TestFieldScan:
    def test_whitespace_around_colon(self) -> None:
        assert scan_string_field('{"text"   :   "v"}', "text") == "v"

    def test_escaped_backslash_before_quote(self) -> None:
        assert scan_string_field('{"text": "path\\\\"}', "text") == "path\\"

    def test_absent_field(self) -> None:
        assert scan_string_field('{"other": "v"}', "text") is None

    def test_unterminated_string(self) -> None:
        assert scan_string_field('{"text": "never ends', "text") is None

    def test_unescape_simple_sequences(self) -> None:
        assert unescape_json_string('tab\\there \\"q\\" \\/') == 'tab\there "q" /'
