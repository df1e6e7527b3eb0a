"""Response decoding for the provider wire formats.

Bodies are decoded with ``json`` first.  When a 200 body is not valid JSON
(proxies that append junk, truncated streams), a tolerant fallback locates
the content field with optional whitespace around the colon and scans to its
closing quote honouring backslash escapes, so an escaped quote inside the
content never ends the field early.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from aicopilot.exceptions import ParseFailureError

log = logging.getLogger(__name__)

_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    '"': '"',
    "\\": "\\",
    "/": "/",
}


def unescape_json_string(raw: str) -> str:
    """Reverse JSON string escaping of a field body (without its quotes)."""
    try:
        return json.loads(f'"{raw}"', strict=False)
    except ValueError:
        pass

    def _replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq.startswith("u") and len(seq) == 5:
            return chr(int(seq[1:], 16))
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(_replace, raw)


def scan_string_field(body: str, field: str) -> str | None:
    """Find ``"field": "..."`` in ``body`` and return the unescaped value.

    Returns None when the field is absent or its string never terminates.
    """
    match = re.search(rf'"{re.escape(field)}"\s*:\s*"', body)
    if match is None:
        return None

    start = match.end()
    escaped = False
    for i in range(start, len(body)):
        ch = body[i]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            return unescape_json_string(body[start:i])
    return None


def _load(body: str) -> Any | None:
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        log.debug("Response body is not valid JSON, using field scan")
        return None


def _fallback(body: str, field: str, provider: str) -> str:
    value = scan_string_field(body, field)
    if value is None:
        log.error(
            "Failed to parse %s response",
            provider,
            extra={"response_length": len(body), "response_preview": body[:200]},
        )
        raise ParseFailureError(f"No {field!r} field in {provider} response", raw_response=body)
    return value


def parse_openai_response(body: str) -> str:
    """Extract ``choices[0].message.content`` from a chat-completions body."""
    data = _load(body)
    if data is None:
        return _fallback(body, "content", "openai")
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ParseFailureError(f"Unexpected openai response shape: {e}", raw_response=body) from e
    if content is not None and not isinstance(content, str):
        raise ParseFailureError("openai content is not a string", raw_response=body)
    return content or ""


def parse_claude_response(body: str) -> str:
    """Concatenate the ``text`` blocks of a messages-API body."""
    data = _load(body)
    if data is None:
        return _fallback(body, "text", "claude")
    try:
        blocks = data["content"]
        if isinstance(blocks, str):
            return blocks
        return "".join(
            block.get("text", "") for block in blocks if block.get("type", "text") == "text"
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ParseFailureError(f"Unexpected claude response shape: {e}", raw_response=body) from e
