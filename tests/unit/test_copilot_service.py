"""Tests for CopilotService: gating, analysis fallback and wiring."""

from __future__ import annotations

import pytest

from aicopilot.core.config import AppSettings, CompletionConfig, FeatureConfig, LLMConfig
from aicopilot.models import Failed, NoSuggestion, Suggestion, TriggerKind
from aicopilot.services import copilot as copilot_module
from aicopilot.services.copilot import CopilotService, extension_of
from tests.fakes.fake_provider import FakeCompletionProvider


def _offset_after(text: str, needle: str) -> int:
    return text.index(needle) + len(needle)


class TestExtensionOf:
    @pytest.mark.parametrize(
        ("name", "ext"),
        [("Main.java", "java"), ("src/app.test.ts", "ts"), ("Makefile", ""), ("a.PY", "PY")],
    )
    def test_suffix(self, name: str, ext: str) -> None:
        assert extension_of(name) == ext


class TestRequestCompletion:
    async def test_suggestion(self, settings: AppSettings, java_source: str) -> None:
        provider = FakeCompletionProvider(response="sum = 1;")
        service = CopilotService(settings, provider=provider)
        offset = _offset_after(java_source, "int sum = 0;")

        result = await service.request_completion(java_source, "Cart.java", "java", offset)

        assert result == Suggestion("sum = 1;")
        prompt = provider.calls[0]["prompt_text"]
        assert "File: Cart.java" in prompt
        assert prompt.endswith("Current line to complete:\n        int sum = 0;\n\nCompletion:")

    async def test_unavailable_provider_is_gated(self, settings: AppSettings, java_source: str) -> None:
        provider = FakeCompletionProvider(configured=False)
        service = CopilotService(settings, provider=provider)
        result = await service.request_completion(
            java_source, "Cart.java", "java", 0, TriggerKind.MANUAL
        )
        assert result == NoSuggestion("provider_unavailable")
        assert provider.calls == []

    async def test_unsupported_file(self, settings: AppSettings) -> None:
        service = CopilotService(settings, provider=FakeCompletionProvider())
        result = await service.request_completion("some notes here", "notes.txt", "plaintext", 15)
        assert result == NoSuggestion("unsupported_file_type")

    async def test_comment_detected_for_short_line(self, settings: AppSettings) -> None:
        provider = FakeCompletionProvider()
        service = CopilotService(settings, provider=provider)
        text = "x = 1\n# \n"
        result = await service.request_completion(text, "a.py", "python", 8)
        assert isinstance(result, Suggestion)

    async def test_host_comment_flag_wins(self, settings: AppSettings) -> None:
        service = CopilotService(settings, provider=FakeCompletionProvider())
        result = await service.request_completion("x", "a.py", "python", 1, is_in_comment=True)
        assert isinstance(result, Suggestion)

    async def test_bad_offset(self, settings: AppSettings) -> None:
        service = CopilotService(settings, provider=FakeCompletionProvider())
        result = await service.request_completion("abc", "a.py", "python", 10)
        assert isinstance(result, Failed)

    async def test_string_trigger_kind(self, settings: AppSettings) -> None:
        service = CopilotService(settings, provider=FakeCompletionProvider())
        result = await service.request_completion("x", "a.py", "python", 1, "manual")
        assert isinstance(result, Suggestion)

    async def test_unknown_trigger_kind(self, settings: AppSettings) -> None:
        provider = FakeCompletionProvider()
        service = CopilotService(settings, provider=provider)
        result = await service.request_completion("x", "a.py", "python", 1, "eventually")
        assert isinstance(result, Failed)
        assert "eventually" in result.reason
        assert provider.calls == []

    async def test_glob_string_is_not_a_comment(self, settings: AppSettings) -> None:
        settings.features = FeatureConfig(enable_comment_completion=False)
        service = CopilotService(settings, provider=FakeCompletionProvider())
        text = 'files = glob.glob("data/*.csv")\nresult = compute('
        result = await service.request_completion(text, "a.py", "python", len(text))
        assert isinstance(result, Suggestion)

    async def test_analysis_failure_assumes_code(
        self, settings: AppSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _boom(*args: object, **kwargs: object) -> None:
            raise RuntimeError("analysis broke")

        monkeypatch.setattr(copilot_module, "analyze", _boom)
        service = CopilotService(settings, provider=FakeCompletionProvider())
        result = await service.request_completion("value = compute()", "a.py", "python", 17)
        assert isinstance(result, Suggestion)


class TestWiring:
    def test_cache_disabled(self, settings: AppSettings) -> None:
        settings.completion = CompletionConfig(cache_enabled=False)
        service = CopilotService(settings, provider=FakeCompletionProvider())
        assert service.orchestrator.cache is None

    def test_provider_from_settings(self) -> None:
        settings = AppSettings(llm=LLMConfig(provider="claude", claude_api_key="sk-ant"))
        service = CopilotService(settings)
        assert service.provider.name == "claude"
        assert service.is_available()

    async def test_context_manager_closes_provider(self, settings: AppSettings) -> None:
        provider = FakeCompletionProvider()
        async with CopilotService(settings, provider=provider):
            pass
        assert provider.closed

    def test_extract_context(self, settings: AppSettings, python_source: str) -> None:
        service = CopilotService(settings, provider=FakeCompletionProvider())
        bundle = service.extract_context(python_source, "loader.py", "python", 0)
        assert bundle.dependency_lines == ("import os", "from pathlib import Path")
