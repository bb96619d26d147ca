# ABOUTME: The `folio group` command for collapsing format variants into logical books.
# ABOUTME: Scans a directory, optionally resolves metadata, and prints each book with its formats.

import asyncio
import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.cli.options import (
    google_api_key_option,
    include_google_option,
    json_option,
    providers_from_options,
    request_timeout_option,
    timeout_option,
)
from folio.cli.output import group_to_dict
from folio.core.grouping import FORMAT_PRIORITIES, preferred_format
from folio.core.pipeline import CatalogResult, build_catalog
from folio.core.variants import find_ebooks
from folio.metadata.provider import MetadataProvider
from folio.metadata.registry import close_providers


async def _catalog(
    files: list[Path], providers: list[MetadataProvider] | None, timeout: float | None
) -> CatalogResult:
    try:
        return await build_catalog(files, providers, timeout=timeout)
    finally:
        if providers:
            await close_providers(providers)


@click.command("group")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--purpose",
    type=click.Choice(sorted(FORMAT_PRIORITIES)),
    default="reading",
    show_default=True,
    help="Which format preference to use when picking each book's best file.",
)
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Group from filenames and embedded ISBNs only; no network lookups.",
)
@google_api_key_option
@include_google_option
@timeout_option
@request_timeout_option
@json_option
def group(
    path: Path,
    purpose: str,
    offline: bool,
    google_api_key: str | None,
    include_google: bool,
    timeout: float | None,
    request_timeout: float,
    json_output: bool,
) -> None:
    """Group the ebook files under PATH into books, one row per book."""
    console = Console()

    files = find_ebooks(path)
    if not files:
        console.print("[yellow]No ebook files found.[/yellow]")
        return

    providers = None
    if not offline:
        providers = providers_from_options(google_api_key, include_google, request_timeout)
    result = asyncio.run(_catalog(files, providers, timeout))

    if json_output:
        data = {
            "scan_root": str(path),
            "total_files": result.total_files,
            "total_books": len(result.groups),
            "purpose": purpose,
            "books": [group_to_dict(g, purpose) for g in result.groups],
            "timed_out": [str(p) for p, _ in result.timed_out],
        }
        click.echo(json_lib.dumps(data, indent=2))
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Formats")
    table.add_column(f"Best for {purpose}", style="green")
    table.add_column("Key", style="dim")

    for book in result.groups:
        primary = book.primary_variant
        preferred = preferred_format(book, purpose)
        meta = primary.metadata if primary else None
        table.add_row(
            escape(meta.title) if meta else "[dim]untitled[/dim]",
            escape(meta.author) if meta and meta.authors else "[dim]unknown[/dim]",
            ", ".join(book.formats),
            escape(preferred.path.name) if preferred and preferred.path else "[dim]-[/dim]",
            escape(book.group_key),
        )

    console.print(table)
    for _, message in result.timed_out:
        console.print(f"[red]Timed out:[/red] {escape(message)}")
    console.print(
        f"\n[dim]{result.total_files} file(s), {len(result.groups)} book(s)[/dim]"
    )
