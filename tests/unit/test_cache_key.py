"""Tests for completion cache key derivation."""

from __future__ import annotations

from aicopilot.cache.key_strategy import compute_cache_key
from aicopilot.models import ContextBundle


def _bundle(text: str) -> ContextBundle:
    return ContextBundle(file_name="A.java", language_id="java", text=text)


class TestComputeCacheKey:
    def test_deterministic(self) -> None:
        assert compute_cache_key(_bundle("ctx"), "int x") == compute_cache_key(_bundle("ctx"), "int x")

    def test_sha256_hex(self) -> None:
        key = compute_cache_key(_bundle("ctx"), "line")
        assert len(key) == 64
        int(key, 16)

    def test_differs_by_line(self) -> None:
        assert compute_cache_key(_bundle("ctx"), "a") != compute_cache_key(_bundle("ctx"), "b")

    def test_differs_by_context(self) -> None:
        assert compute_cache_key(_bundle("one"), "a") != compute_cache_key(_bundle("two"), "a")

    def test_boundary_is_unambiguous(self) -> None:
        assert compute_cache_key(_bundle("ab"), "c") != compute_cache_key(_bundle("a"), "bc")
