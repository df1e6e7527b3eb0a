"""Cheap textual analysis of where the cursor sits.

Feeds the trigger policy (is the cursor in a comment?) and tags each request
with the kind of completion that is likely wanted.
"""

from __future__ import annotations

import dataclasses
from enum import Enum

from aicopilot.context.structure import PYTHON_LANGUAGES, is_class_declaration, is_method_declaration
from aicopilot.context.text_index import TextIndex


class CompletionKind(str, Enum):
    COMMENT = "comment"
    IMPORT_STATEMENT = "import_statement"
    CLASS_DEFINITION = "class_definition"
    FUNCTION_DEFINITION = "function_definition"
    BLOCK_START = "block_start"
    GENERAL_CODE = "general_code"


@dataclasses.dataclass(frozen=True)
class CursorAnalysis:
    in_comment: bool
    in_method: bool
    in_class: bool
    completion_kind: CompletionKind
    current_line: str


def _line_comment_markers(language_id: str) -> tuple[str, ...]:
    lang = language_id.lower()
    if lang in PYTHON_LANGUAGES:
        return ("#",)
    if lang in {"java", "javascript", "typescript", "kotlin", "scala", "js", "ts", "kt"}:
        return ("//",)
    return ("//", "#")


def has_line_comment(segment: str, markers: tuple[str, ...] = ("//", "#")) -> bool:
    """True when ``segment`` contains a line-comment marker outside a string literal."""
    quote: str | None = None
    i = 0
    while i < len(segment):
        ch = segment[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif any(segment.startswith(m, i) for m in markers):
            return True
        i += 1
    return False


def in_open_block_comment(before: str) -> bool:
    """True when ``before`` ends inside a ``/* ... */`` comment.

    String literals and ``//`` line comments are skipped, so ``"**/*.java"``
    does not open a block.  Quotes other than backticks end at a newline.
    """
    state = "code"
    quote = ""
    i = 0
    n = len(before)
    while i < n:
        ch = before[i]
        if state == "block":
            if before.startswith("*/", i):
                state = "code"
                i += 2
                continue
        elif state == "line":
            if ch == "\n":
                state = "code"
        elif state == "string":
            if ch == "\\":
                i += 2
                continue
            if ch == quote or (ch == "\n" and quote != "`"):
                state = "code"
        elif before.startswith("/*", i):
            state = "block"
            i += 2
            continue
        elif before.startswith("//", i):
            state = "line"
        elif ch in "\"'`":
            state, quote = "string", ch
        i += 1
    return state == "block"


def is_in_comment(text: str, offset: int, line_start: int, language_id: str = "") -> bool:
    """Block comment still open before the cursor, or a line comment earlier on its line.

    Python has no block comments; elsewhere a line whose text starts with
    ``*`` is a doc-comment continuation.
    """
    segment = text[line_start:offset]
    if language_id.lower() not in PYTHON_LANGUAGES:
        if in_open_block_comment(text[:offset]):
            return True
        if segment.lstrip().startswith("*"):
            return True
    return has_line_comment(segment, _line_comment_markers(language_id))


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _python_in_method(lines: list[str], cursor_line: int, column: int) -> bool:
    current = lines[cursor_line]
    level = _indent(current) if current.strip() else column
    for i in range(cursor_line - 1, -1, -1):
        line = lines[i]
        if not line.strip():
            continue
        indent = _indent(line)
        if indent >= level:
            continue
        if line.strip().startswith(("def ", "async def ")):
            return True
        level = indent
        if indent == 0:
            return False
    return False


def _brace_in_method(lines: list[str], text_before: str) -> bool:
    found_signature = any(is_method_declaration(line.strip()) for line in lines)
    depth = text_before.count("{") - text_before.count("}")
    return found_signature and depth > 0


def classify_completion(current_line: str, in_comment: bool) -> CompletionKind:
    trimmed = current_line.strip()
    if in_comment:
        return CompletionKind.COMMENT
    if "import " in trimmed or "from " in trimmed:
        return CompletionKind.IMPORT_STATEMENT
    if "class " in trimmed:
        return CompletionKind.CLASS_DEFINITION
    if (
        "def " in trimmed
        or "function " in trimmed
        or ("(" in trimmed and ("public " in trimmed or "private " in trimmed))
    ):
        return CompletionKind.FUNCTION_DEFINITION
    if trimmed.endswith((":", "{", "(")):
        return CompletionKind.BLOCK_START
    return CompletionKind.GENERAL_CODE


def analyze(index: TextIndex, offset: int, language_id: str = "") -> CursorAnalysis:
    """Analyze the cursor position in ``index``; raises ``OutOfRangeError`` on bad offsets."""
    cursor = index.position(offset)
    text = index.text
    current_line = index.line_text(cursor.line_number)
    lines_before = index.lines()[: cursor.line_number + 1]

    in_comment = is_in_comment(text, offset, cursor.line_start, language_id)
    if language_id.lower() in PYTHON_LANGUAGES:
        in_method = _python_in_method(lines_before, cursor.line_number, cursor.column)
    else:
        in_method = _brace_in_method(lines_before[:-1], text[:offset])
    in_class = any(is_class_declaration(line.strip()) for line in lines_before[:-1])

    return CursorAnalysis(
        in_comment=in_comment,
        in_method=in_method,
        in_class=in_class,
        completion_kind=classify_completion(current_line, in_comment),
        current_line=current_line,
    )
