# ABOUTME: The `folio parse` command for checking filename heuristics.
# ABOUTME: Prints the title and author guessed from each filename without any network access.

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.metadata.filename import parse as parse_filename


@click.command("parse")
@click.argument("filenames", nargs=-1, required=True)
def parse(filenames: tuple[str, ...]) -> None:
    """Show the title and author guessed from each FILENAME."""
    console = Console()

    table = Table()
    table.add_column("Filename", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")

    for filename in filenames:
        parsed = parse_filename(filename)
        table.add_row(
            escape(filename),
            escape(parsed.title),
            escape(parsed.author) if parsed.author else "[dim]unknown[/dim]",
        )

    console.print(table)
