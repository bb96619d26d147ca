# ABOUTME: CLI package for Folio, built on Click.
# ABOUTME: Defines the root command group, verbose logging, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from folio.cli.commands import group_cmd, parse_cmd, resolve_cmd


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG when verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=verbose,
                show_path=False,
            )
        ],
        force=True,
    )
    # httpx logs every request at INFO; our own DEBUG lines already cover that.
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
@click.version_option(package_name="folio")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Folio - ebook metadata resolution and deduplication."""
    _configure_logging(verbose)


cli.add_command(parse_cmd.parse)
cli.add_command(resolve_cmd.resolve)
cli.add_command(group_cmd.group)
