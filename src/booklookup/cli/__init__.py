# ABOUTME: CLI package for booklookup, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from booklookup.cli.commands import enrich_cmd, isbn_cmd, title_cmd


@click.group()
@click.version_option(package_name="booklookup")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log source calls to stderr.")
def cli(verbose: bool) -> None:
    """booklookup - resolve book metadata from Google Books, Open Library, and WorldCat."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


cli.add_command(isbn_cmd.isbn)
cli.add_command(enrich_cmd.enrich)
cli.add_command(title_cmd.title)
