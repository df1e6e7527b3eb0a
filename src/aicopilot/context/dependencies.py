"""Import / package / require declaration extraction."""

from __future__ import annotations

from collections.abc import Iterable

MAX_SCAN_LINES = 50
MAX_COLLECTED = 20
MAX_DEPENDENCIES = 15

_COMMENT_PREFIXES = ("//", "/*", "*", "#")
_DECLARATION_PREFIXES = ("package ", "import ", "from ")
_BINDING_PREFIXES = ("const ", "let ", "var ")


def is_dependency_line(trimmed: str) -> bool:
    """True for package/import/from declarations and ``const x = require(...)`` bindings."""
    if trimmed.startswith(_DECLARATION_PREFIXES):
        return True
    return trimmed.startswith(_BINDING_PREFIXES) and "require" in trimmed


def extract_dependencies(lines: Iterable[str], *, limit: int = MAX_DEPENDENCIES) -> list[str]:
    """Collect dependency declarations from the head of a file.

    Scans at most the first 50 lines, or until more than 20 declarations
    were collected.  Comment lines never contribute.  The result keeps scan
    order, drops duplicates and is capped at ``limit``.
    """
    collected: list[str] = []
    for line_count, line in enumerate(lines, start=1):
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(_COMMENT_PREFIXES) and is_dependency_line(trimmed):
            collected.append(trimmed)
        if line_count >= MAX_SCAN_LINES or len(collected) > MAX_COLLECTED:
            break

    return list(dict.fromkeys(collected))[:limit]
