"""Provider-agnostic completion prompt."""

from __future__ import annotations

from aicopilot.models import ContextBundle

INSTRUCTION = "Complete the following code. Provide only the completion, no explanations:"
SYSTEM_PROMPT = (
    "You are a code completion assistant. "
    "Provide clean, accurate code completions without explanations."
)


def build_prompt(bundle: ContextBundle, current_line: str) -> str:
    """Preamble, context bundle, current line and completion cue, in that order."""
    return (
        f"{INSTRUCTION}\n\n"
        f"Context:\n{bundle.text}"
        f"\n\nCurrent line to complete:\n{current_line}"
        "\n\nCompletion:"
    )
