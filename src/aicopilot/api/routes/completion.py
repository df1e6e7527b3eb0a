"""Completion endpoints for editor hosts."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from aicopilot.models import Failed, NoSuggestion, Suggestion, TriggerKind

router = APIRouter(tags=["completion"])


class CompletionBody(BaseModel):
    """A buffer snapshot and cursor position from the host."""

    file_text: str
    file_name: str
    language_id: str = ""
    cursor_offset: int = Field(ge=0)
    trigger_kind: TriggerKind = TriggerKind.AUTOMATIC
    is_in_comment: Optional[bool] = None


class CompletionResponse(BaseModel):
    """One of suggestion / no_suggestion / failed."""

    kind: Literal["suggestion", "no_suggestion", "failed"]
    text: str = ""
    reason: str = ""
    cached: bool = False


class ContextBody(BaseModel):
    file_text: str
    file_name: str
    language_id: str = ""
    cursor_offset: int = Field(ge=0)


class ContextResponse(BaseModel):
    file_name: str
    language_id: str
    dependency_lines: list[str] = Field(default_factory=list)
    structure_lines: list[str] = Field(default_factory=list)
    code_window: str = ""
    text: str = ""
    truncated: bool = False


@router.post("/complete", response_model=CompletionResponse)
async def complete(body: CompletionBody, request: Request) -> CompletionResponse:
    """Request a completion at ``cursor_offset``.

    On ``suggestion`` the host inserts ``text`` at the original offset and
    advances the cursor by its length.
    """
    service = request.app.state.copilot
    result = await service.request_completion(
        body.file_text,
        body.file_name,
        body.language_id,
        body.cursor_offset,
        body.trigger_kind,
        is_in_comment=body.is_in_comment,
    )
    if isinstance(result, Suggestion):
        return CompletionResponse(kind=result.kind.value, text=result.text, cached=result.cached)
    if isinstance(result, NoSuggestion):
        return CompletionResponse(kind=result.kind.value, reason=result.reason)
    assert isinstance(result, Failed)
    return CompletionResponse(kind=result.kind.value, reason=result.reason)


@router.post("/context", response_model=ContextResponse)
async def context(body: ContextBody, request: Request) -> ContextResponse:
    """Return the context bundle that a completion at this offset would send."""
    service = request.app.state.copilot
    bundle = service.extract_context(
        body.file_text, body.file_name, body.language_id, body.cursor_offset
    )
    return ContextResponse(
        file_name=bundle.file_name,
        language_id=bundle.language_id,
        dependency_lines=list(bundle.dependency_lines),
        structure_lines=list(bundle.structure_lines),
        code_window=bundle.code_window,
        text=bundle.text,
        truncated=bundle.truncated,
    )


@router.post("/cache/clear")
async def clear_cache(request: Request) -> dict[str, str]:
    await request.app.state.copilot.clear_cache()
    return {"status": "cleared"}
