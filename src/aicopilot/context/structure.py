"""Enclosing-scope extraction: the class / method / field lines around the cursor.

Two strategies, tried in order:

1. **Tree walk**: for Python buffers that parse, ``ast`` nodes whose line
   range contains the cursor line are rendered innermost first.
2. **Text scan**: a backward scan of at most 20 lines above the cursor
   looking for declaration-shaped lines.  Used for every other language and
   whenever the tree walk fails or finds nothing (a half-typed line usually
   makes the buffer unparsable).
"""

from __future__ import annotations

import ast
import logging
import re
from collections.abc import Sequence

log = logging.getLogger(__name__)

MAX_STRUCTURE = 5
SCAN_LINES = 20
MAX_DECLARATION_CHARS = 100

PYTHON_LANGUAGES = frozenset({"python", "py", "python3"})

_COMMENT_PREFIXES = ("//", "/*", "*", "#")

_MODIFIERS = (
    r"(?:(?:public|private|protected|internal|abstract|final|static|sealed|open|data|"
    r"export|default|async|override|inline|suspend|case|partial)\s+)*"
)
_CLASS_RE = re.compile(rf"^{_MODIFIERS}(?:class|interface|enum|struct|object|trait)\s+\w")
_KEYWORD_FUNCTION_RE = re.compile(rf"^{_MODIFIERS}(?:def|fun|func|function)\b[^(]*\(")
_ACCESS_RE = re.compile(r"\b(?:public|private|protected)\b")
_BRACE_SIGNATURE_RE = re.compile(r"^([\w$][\w$<>\[\],.?\s]*?)\s*\(.*\)\s*(?:throws\s+[\w.,\s]+)?\{$")
_FIELD_RE = re.compile(
    r"^(?:(?:public|private|protected|internal|static|final|readonly|override|lateinit|"
    r"val|var|let|const)\s+)+[\w$<>\[\]?,.:\s]+?(?:\s*=.*|;)$"
)
_PY_FIELD_RE = re.compile(r"^[A-Za-z_]\w*\s*:\s*[\w\[\], .|]+(?:=.*)?$")

_CONTROL_KEYWORDS = frozenset(
    {"if", "for", "while", "switch", "catch", "else", "do", "try", "synchronized",
     "with", "return", "new", "throw", "when", "foreach", "using", "lock"}
)


# ── Line classification ──────────────────────────────────────────────


def _is_comment(trimmed: str) -> bool:
    return trimmed.startswith(_COMMENT_PREFIXES)


def is_class_declaration(trimmed: str) -> bool:
    return not _is_comment(trimmed) and bool(_CLASS_RE.match(trimmed))


def is_method_declaration(trimmed: str) -> bool:
    """Keyword-prefixed functions, access-modified signatures, or ``name(...) {``."""
    if _is_comment(trimmed) or "(" not in trimmed:
        return False
    if _KEYWORD_FUNCTION_RE.match(trimmed):
        return True
    if _ACCESS_RE.search(trimmed) and "=" not in trimmed.split("(", 1)[0]:
        return True
    match = _BRACE_SIGNATURE_RE.match(trimmed)
    if match is None:
        return False
    first_word = match.group(1).split()[0] if match.group(1).split() else ""
    return first_word not in _CONTROL_KEYWORDS and "=" not in match.group(1)


def is_field_declaration(trimmed: str, *, python: bool = False) -> bool:
    """Modifier-prefixed assignments; bare ``name: Type`` only in Python."""
    if _is_comment(trimmed) or "(" in trimmed:
        return False
    if _FIELD_RE.match(trimmed):
        return True
    return python and bool(_PY_FIELD_RE.match(trimmed))


def clean_declaration(line: str) -> str:
    """Reduce a declaration to one display line.

    Everything from the first ``{`` is dropped; a trailing ``:`` is dropped
    unless it closes a Python ``def``/``class`` header.
    """
    line = line.strip()
    if "{" in line:
        line = line[: line.index("{")].strip()
    if line.endswith(":") and not line.startswith(("def ", "async def ", "class ")):
        line = line[:-1].strip()
    if len(line) > MAX_DECLARATION_CHARS:
        line = line[:MAX_DECLARATION_CHARS] + "..."
    return line


def classify_line(trimmed: str, *, python: bool = False) -> str | None:
    """Return the labeled rendering of a declaration line, or None."""
    if not trimmed:
        return None
    if is_class_declaration(trimmed):
        return "Class: " + clean_declaration(trimmed)
    if is_method_declaration(trimmed):
        return "Method: " + clean_declaration(trimmed)
    if is_field_declaration(trimmed, python=python):
        return "Field: " + clean_declaration(trimmed)
    return None


# ── Strategies ───────────────────────────────────────────────────────


def scan_structure(lines: Sequence[str], cursor_line: int, *, python: bool = False) -> list[str]:
    """Backward text scan from ``cursor_line`` over at most 20 preceding lines."""
    found: list[str] = []
    stop = max(cursor_line - SCAN_LINES, 0)
    for i in range(min(cursor_line, len(lines) - 1), stop - 1, -1):
        entry = classify_line(lines[i].strip(), python=python)
        if entry:
            found.append(entry)
    return found


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _scope_end(node: ast.AST, lines: Sequence[str], target: int) -> int:
    """Last 1-based line owned by a def/class ``node``.

    ``ast`` stops a scope at its last statement; blank lines and lines
    indented deeper than the header that follow it (a fresh line being typed
    at the end of a body) still belong to it, up to ``target``.
    """
    end = getattr(node, "end_lineno", None) or node.lineno
    if target <= end or target > len(lines):
        return end
    header_indent = _indent(lines[node.lineno - 1])
    for number in range(end + 1, target + 1):
        line = lines[number - 1]
        if number == target:
            return target if _indent(line) > header_indent else end
        if line.strip() and _indent(line) <= header_indent:
            return end
    return end


def tree_structure(source: str, lines: Sequence[str], cursor_line: int) -> list[str]:
    """Enclosing ``ast`` scopes of a Python buffer, innermost first.

    Fields are assignments made directly in a class body; locals inside a
    function are not reported.  Raises whatever ``ast.parse`` raises on
    unparsable input.
    """
    tree = ast.parse(source)
    target = cursor_line + 1

    enclosing: list[ast.AST] = []
    for node in ast.walk(tree):
        if isinstance(node, (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
            if node.lineno <= target <= _scope_end(node, lines, target):
                enclosing.append(node)
        if isinstance(node, ast.ClassDef):
            enclosing.extend(
                child
                for child in node.body
                if isinstance(child, (ast.Assign, ast.AnnAssign))
                and child.lineno <= target <= (child.end_lineno or child.lineno)
            )
    enclosing.sort(key=lambda n: n.lineno, reverse=True)

    rendered: list[str] = []
    for node in enclosing:
        header = lines[node.lineno - 1].strip()
        if isinstance(node, ast.ClassDef):
            rendered.append("Class: " + clean_declaration(header))
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            rendered.append("Method: " + clean_declaration(header))
        else:
            rendered.append("Field: " + clean_declaration(header))
    return rendered


def extract_structure(
    source: str,
    lines: Sequence[str],
    cursor_line: int,
    language_id: str,
    *,
    limit: int = MAX_STRUCTURE,
) -> list[str]:
    """Structure lines around ``cursor_line``: deduplicated, nearest first, capped."""
    entries: list[str] = []
    python = language_id.lower() in PYTHON_LANGUAGES
    if python:
        try:
            entries = tree_structure(source, lines, cursor_line)
        except Exception as e:
            log.debug("Syntax tree unavailable, falling back to text scan: %s", e)
            entries = []

    if not entries:
        entries = scan_structure(lines, cursor_line, python=python)

    return list(dict.fromkeys(entries))[:limit]
