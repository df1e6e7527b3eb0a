"""CLI for aicopilot: complete / context / check commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from aicopilot.context.text_index import TextIndex
from aicopilot.core.config import AppSettings
from aicopilot.core.startup_checks import validate_settings
from aicopilot.exceptions import OutOfRangeError
from aicopilot.models import CompletionResult, Failed, NoSuggestion, Suggestion, TriggerKind
from aicopilot.services.copilot import CopilotService

app = typer.Typer(name="aicopilot", help="Context-aware AI code completion")
console = Console()

_LANGUAGES = {
    "py": "python",
    "java": "java",
    "js": "javascript",
    "ts": "typescript",
    "kt": "kotlin",
    "scala": "scala",
}


def _language_for(path: Path, language: Optional[str]) -> str:
    if language:
        return language
    return _LANGUAGES.get(path.suffix.lstrip("."), path.suffix.lstrip("."))


def _resolve_offset(text: str, offset: Optional[int], line: Optional[int], column: Optional[int]) -> int:
    """Accept either a raw offset or a 1-based line and 0-based column."""
    if offset is not None:
        return offset
    if line is None:
        raise typer.BadParameter("Pass --offset or --line")
    index = TextIndex(text)
    try:
        span = index.span_of(line - 1)
    except OutOfRangeError as e:
        raise typer.BadParameter(str(e)) from e
    return min(span.start + (column or 0), span.end)


def _setup(verbose: bool) -> AppSettings:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    return AppSettings()


@app.command()
def complete(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source file"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Cursor character offset"),
    line: Optional[int] = typer.Option(None, "--line", help="Cursor line (1-based)"),
    column: Optional[int] = typer.Option(None, "--column", help="Cursor column (0-based)"),
    language: Optional[str] = typer.Option(None, "--language", help="Language id"),
    manual: bool = typer.Option(False, "--manual", help="Use the manual trigger budget"),
    insert: bool = typer.Option(False, "--insert", help="Write the suggestion into the file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Request a completion at a cursor position."""
    settings = _setup(verbose)
    text = file.read_text(encoding="utf-8")
    cursor = _resolve_offset(text, offset, line, column)
    trigger = TriggerKind.MANUAL if manual else TriggerKind.AUTOMATIC

    async def _run() -> CompletionResult:
        async with CopilotService(settings) as service:
            return await service.request_completion(
                text, file.name, _language_for(file, language), cursor, trigger
            )

    result = asyncio.run(_run())

    if isinstance(result, Suggestion):
        tag = " (cached)" if result.cached else ""
        console.print(f"[green]Suggestion{tag}:[/green]")
        console.print(result.text, markup=False, highlight=False)
        if insert:
            new_text, new_offset = result.apply(text, cursor)
            file.write_text(new_text, encoding="utf-8")
            console.print(f"[green]Inserted into {file}, cursor now at {new_offset}[/green]")
    elif isinstance(result, NoSuggestion):
        console.print(f"[yellow]No suggestion: {result.reason}[/yellow]")
    else:
        assert isinstance(result, Failed)
        console.print(f"[red]Failed: {result.reason}[/red]")
        raise typer.Exit(code=1)


@app.command()
def context(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Source file"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Cursor character offset"),
    line: Optional[int] = typer.Option(None, "--line", help="Cursor line (1-based)"),
    column: Optional[int] = typer.Option(None, "--column", help="Cursor column (0-based)"),
    language: Optional[str] = typer.Option(None, "--language", help="Language id"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the context bundle that would be sent for a cursor position."""
    settings = _setup(verbose)
    text = file.read_text(encoding="utf-8")
    cursor = _resolve_offset(text, offset, line, column)

    service = CopilotService(settings)
    try:
        bundle = service.extract_context(text, file.name, _language_for(file, language), cursor)
    except OutOfRangeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        asyncio.run(service.aclose())

    console.print(bundle.text, markup=False, highlight=False)
    console.print(
        f"\n[dim]{bundle.total_length} chars"
        f"{', truncated' if bundle.truncated else ''}[/dim]"
    )


@app.command()
def check() -> None:
    """Validate configuration and report the active provider."""
    settings = AppSettings()
    try:
        validate_settings(settings)
        error = ""
    except ValueError as e:
        error = str(e)

    table = Table(title="aicopilot configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Provider", settings.llm.provider)
    configured = bool(settings.llm.api_key_for(settings.llm.provider))
    table.add_row("Credential", "[green]set[/green]" if configured else "[yellow]missing[/yellow]")
    table.add_row("Automatic budget", f"{settings.completion.timeout_seconds(manual=False):.1f}s")
    table.add_row("Manual budget", f"{settings.completion.timeout_seconds(manual=True):.1f}s")
    table.add_row("Cache", str(settings.completion.cache_size) if settings.completion.cache_enabled else "off")
    table.add_row("Context cap", f"{settings.context.max_context_chars} chars")
    console.print(table)

    if error:
        console.print(f"[red]{error}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]Configuration OK[/green]")


if __name__ == "__main__":
    app()
