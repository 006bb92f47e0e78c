# ABOUTME: Helpers shared by booklookup CLI commands: building the lookup and rendering results.
# ABOUTME: Commands run the async lookup API through asyncio.run.

import asyncio
from collections.abc import Awaitable, Callable

from rich.console import Console
from rich.table import Table

from booklookup.metadata.config import LookupConfig
from booklookup.metadata.isbn import format_isbn
from booklookup.metadata.service import BookLookup, create_default_lookup
from booklookup.metadata.types import LookupResult

console = Console()


def build_lookup(sources: tuple[str, ...], google_api_key: str | None) -> BookLookup:
    """Create the BookLookup used by CLI commands."""
    config = LookupConfig(source_order=sources, google_api_key=google_api_key)
    return create_default_lookup(config)


def run_lookup(
    lookup: BookLookup, operation: Callable[[BookLookup], Awaitable[LookupResult]]
) -> LookupResult:
    """Run one lookup operation and close the lookup's HTTP client afterwards."""

    async def _run() -> LookupResult:
        async with lookup:
            return await operation(lookup)

    return asyncio.run(_run())


def print_result(result: LookupResult) -> None:
    """Render a LookupResult; exits with status 1 when the lookup failed."""
    attempted = ", ".join(result.attempted_sources) or "none"

    if not result.success or result.data is None:
        console.print(f"[red]Not found:[/red] {result.error}")
        console.print(f"[dim]Tried: {attempted}[/dim]")
        raise SystemExit(1)

    book = result.data
    table = Table(title=book.title, show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", book.title)
    table.add_row("Author", book.author)
    table.add_row("ISBN", format_isbn(book.isbn) if book.isbn else "[dim]none[/dim]")
    table.add_row("Publisher", book.publisher or "[dim]unknown[/dim]")
    table.add_row("Published", book.published_date or "[dim]unknown[/dim]")
    if book.pages is not None:
        table.add_row("Pages", str(book.pages))
    if book.oclc_number:
        table.add_row("OCLC", book.oclc_number)
    if book.subjects:
        table.add_row("Subjects", ", ".join(book.subjects))
    table.add_row("Cover", book.cover_image_url or "[dim]none[/dim]")
    table.add_row("Synopsis", book.synopsis or "[dim]none[/dim]")

    console.print(table)
    fallback = " [yellow](fallback)[/yellow]" if result.fallback_used else ""
    console.print(f"[dim]Source:[/dim] {result.source}{fallback}")
    console.print(f"[dim]Tried: {attempted}[/dim]")
