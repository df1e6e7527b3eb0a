"""Shared fixtures for aicopilot tests."""

from __future__ import annotations

import pytest

from aicopilot.core.config import AppSettings, CompletionConfig, LLMConfig


@pytest.fixture
def settings() -> AppSettings:
    """Test settings with a dummy OpenAI credential and short budgets."""
    return AppSettings(
        llm=LLMConfig(provider="openai", openai_api_key="test-key", claude_api_key="test-claude-key"),
        completion=CompletionConfig(automatic_timeout_ms=500, manual_timeout_ms=2000),
    )


@pytest.fixture
def java_source() -> str:
    """Small Java class with imports, a field and a method under edit."""
    return (
        "package com.example.shop;\n"
        "\n"
        "import java.util.List;\n"
        "import java.util.ArrayList;\n"
        "\n"
        "public class Cart {\n"
        "    private final List<Item> items = new ArrayList<>();\n"
        "\n"
        "    public int total() {\n"
        "        int sum = 0;\n"
        "        for (Item item : items) {\n"
        "            sum += item.price();\n"
        "        }\n"
        "        \n"
        "    }\n"
        "}\n"
    )


@pytest.fixture
def python_source() -> str:
    """Parsable Python module with a class, a field and a method."""
    return (
        "import os\n"
        "from pathlib import Path\n"
        "\n"
        "\n"
        "class Loader:\n"
        "    root: Path = Path('.')\n"
        "\n"
        "    def load(self, name):\n"
        "        path = self.root / name\n"
        "        return path.read_text()\n"
    )
