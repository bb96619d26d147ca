# ABOUTME: The `folio resolve` command for metadata lookup of ebook files.
# ABOUTME: Seeds each file from its name and embedded ISBN, then resolves them concurrently.

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
from folio.cli.output import record_to_dict
from folio.core.pipeline import resolve_files
from folio.core.resolver import ResolutionOutcome
from folio.core.variants import find_ebooks
from folio.metadata.provider import MetadataProvider
from folio.metadata.registry import close_providers


async def _resolve_all(
    paths: list[Path], providers: list[MetadataProvider], timeout: float | None
) -> list[ResolutionOutcome]:
    try:
        return await resolve_files(paths, providers, timeout=timeout)
    finally:
        await close_providers(providers)


@click.command("resolve")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@google_api_key_option
@include_google_option
@timeout_option
@request_timeout_option
@json_option
def resolve(
    paths: tuple[Path, ...],
    google_api_key: str | None,
    include_google: bool,
    timeout: float | None,
    request_timeout: float,
    json_output: bool,
) -> None:
    """Resolve metadata for ebook files (or directories of them) at PATHS."""
    console = Console()

    files = [f for path in paths for f in find_ebooks(path)]
    if not files:
        console.print("[yellow]No ebook files found.[/yellow]")
        return

    providers = providers_from_options(google_api_key, include_google, request_timeout)
    outcomes = asyncio.run(_resolve_all(files, providers, timeout))

    if json_output:
        data = [
            {
                "path": str(path),
                "timed_out": outcome.timed_out,
                "metadata": record_to_dict(outcome.metadata),
            }
            for path, outcome in zip(files, outcomes, strict=True)
        ]
        click.echo(json_lib.dumps(data, indent=2))
        return

    table = Table()
    table.add_column("File", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Source")
    table.add_column("Conf.", justify="right")

    for path, outcome in zip(files, outcomes, strict=True):
        record = outcome.metadata
        table.add_row(
            escape(path.name),
            escape(record.title),
            escape(record.author) or "[dim]unknown[/dim]",
            record.identifier or "[dim]-[/dim]",
            "[red]timed out[/red]" if outcome.timed_out else record.source,
            f"{record.confidence:.2f}",
        )

    console.print(table)
    for outcome in outcomes:
        if outcome.timed_out:
            console.print(f"[red]Timed out:[/red] {escape(str(outcome.error))}")

    timed_out = sum(1 for outcome in outcomes if outcome.timed_out)
    summary = f"{len(outcomes) - timed_out} file(s) resolved"
    if timed_out:
        summary += f", {timed_out} timed out"
    console.print(f"\n[dim]{summary}[/dim]")
