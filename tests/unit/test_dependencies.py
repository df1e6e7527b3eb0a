"""Tests for dependency-line extraction."""

from __future__ import annotations

from aicopilot.context.dependencies import extract_dependencies, is_dependency_line


class TestIsDependencyLine:
    def test_declaration_prefixes(self) -> None:
        assert is_dependency_line("package com.example;")
        assert is_dependency_line("import java.util.List;")
        assert is_dependency_line("from os import path")

    def test_require_bindings(self) -> None:
        assert is_dependency_line("const fs = require('fs');")
        assert is_dependency_line("let path = require('path')")
        assert not is_dependency_line("const answer = 42;")

    def test_plain_code_is_not_a_dependency(self) -> None:
        assert not is_dependency_line("return imported;")
        assert not is_dependency_line("important = True")


class TestExtractDependencies:
    def test_thirty_imports_capped_at_fifteen_in_order(self) -> None:
        lines = [f"import pkg.mod{i};" for i in range(30)]
        deps = extract_dependencies(lines)
        assert deps == [f"import pkg.mod{i};" for i in range(15)]

    def test_skips_comments(self) -> None:
        lines = [
            "// import not.this;",
            "/* import nor.this; */",
            " * import still.not;",
            "# import python.comment",
            "import real.one;",
        ]
        assert extract_dependencies(lines) == ["import real.one;"]

    def test_duplicates_dropped_keeping_first(self) -> None:
        lines = ["import a;", "import b;", "import a;"]
        assert extract_dependencies(lines) == ["import a;", "import b;"]

    def test_only_first_fifty_lines_scanned(self) -> None:
        lines = ["x = 1"] * 50 + ["import late.one;"]
        assert extract_dependencies(lines) == []

    def test_lines_are_trimmed(self) -> None:
        assert extract_dependencies(["   import os   "]) == ["import os"]

    def test_custom_limit(self) -> None:
        lines = [f"import m{i}" for i in range(10)]
        assert extract_dependencies(lines, limit=3) == ["import m0", "import m1", "import m2"]

    def test_no_dependencies(self) -> None:
        assert extract_dependencies(["int x = 0;", ""]) == []
