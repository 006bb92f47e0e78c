# ABOUTME: The `booklookup title` command for fuzzy title/author lookup.
# ABOUTME: Searches sources in order and accepts only results that match the query closely.

import click

from booklookup.cli import common
from booklookup.cli.options import api_key_option, sources_option


@click.command()
@click.argument("title")
@click.option("-a", "--author", default=None, help="Author name to match against.")
@sources_option
@api_key_option
def title(
    title: str, author: str | None, sources: tuple[str, ...], google_api_key: str | None
) -> None:
    """Find a book by title and optional author."""
    if not title.strip():
        raise click.BadParameter("title must not be empty", param_hint="TITLE")
    lookup = common.build_lookup(sources, google_api_key)
    result = common.run_lookup(lookup, lambda lk: lk.lookup_by_title(title, author))
    common.print_result(result)
