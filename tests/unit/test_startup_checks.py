"""Tests for startup validation checks."""

from __future__ import annotations

import logging

import pytest

from aicopilot.core.config import AppSettings, CompletionConfig, ContextConfig, LLMConfig
from aicopilot.core.startup_checks import validate_settings


def _settings(**groups: object) -> AppSettings:
    values: dict[str, object] = {"llm": LLMConfig(provider="openai", openai_api_key="sk-test")}
    values.update(groups)
    return AppSettings(**values)


class TestBudgets:
    def test_defaults_pass(self) -> None:
        validate_settings(_settings())

    def test_rejects_zero_automatic_budget(self) -> None:
        with pytest.raises(ValueError, match="AUTOMATIC_TIMEOUT_MS"):
            validate_settings(_settings(completion=CompletionConfig(automatic_timeout_ms=0)))

    def test_rejects_negative_request_timeout(self) -> None:
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT_MS"):
            validate_settings(_settings(completion=CompletionConfig(request_timeout_ms=-5)))

    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="MAX_CONCURRENT"):
            validate_settings(_settings(completion=CompletionConfig(max_concurrent=0)))


class TestCacheAndContext:
    def test_rejects_zero_cache_size(self) -> None:
        with pytest.raises(ValueError, match="CACHE_SIZE"):
            validate_settings(_settings(completion=CompletionConfig(cache_size=0)))

    def test_rejects_cap_smaller_than_marker(self) -> None:
        with pytest.raises(ValueError, match="MAX_CONTEXT_CHARS"):
            validate_settings(_settings(context=ContextConfig(max_context_chars=10)))


class TestApiKey:
    def test_missing_key_only_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        settings = _settings(llm=LLMConfig(provider="claude", claude_api_key=""))
        with caplog.at_level(logging.WARNING):
            validate_settings(settings)
        assert "ANTHROPIC_API_KEY" in caplog.text
