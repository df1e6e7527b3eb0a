"""Remote completion providers.

Usage::

    from aicopilot.providers import ICompletionProvider, build_prompt, create_provider
"""

from __future__ import annotations

from aicopilot.providers.claude import ClaudeProvider
from aicopilot.providers.factory import create_provider
from aicopilot.providers.openai import OpenAIProvider
from aicopilot.providers.prompt import build_prompt
from aicopilot.providers.protocols import ICompletionProvider

__all__ = [
    "ICompletionProvider",
    "OpenAIProvider",
    "ClaudeProvider",
    "build_prompt",
    "create_provider",
]
