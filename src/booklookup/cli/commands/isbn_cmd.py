# ABOUTME: The `booklookup isbn` command for waterfall ISBN lookup.
# ABOUTME: Tries sources in priority order, optionally falling back to a title search.

import click

from booklookup.cli import common
from booklookup.cli.options import api_key_option, sources_option


@click.command()
@click.argument("isbn")
@click.option("--title", default=None, help="Title to search for if the ISBN is not found.")
@click.option("--author", default=None, help="Author to narrow the title search.")
@sources_option
@api_key_option
def isbn(
    isbn: str,
    title: str | None,
    author: str | None,
    sources: tuple[str, ...],
    google_api_key: str | None,
) -> None:
    """Look up a book by ISBN, stopping at the first source that has it."""
    lookup = common.build_lookup(sources, google_api_key)
    result = common.run_lookup(
        lookup, lambda lk: lk.lookup_by_isbn(isbn, title=title, author=author)
    )
    common.print_result(result)
